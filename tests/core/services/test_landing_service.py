"""Unit tests for LandingService reconciliation policy."""

from unittest.mock import patch

import pytest

from core.models.errors import (
    InvalidImageURLError,
    MissingImageKeyError,
    UploadDisabledError,
)
from core.models.landing import LandingPage, LandingUpsert
from core.repositories.image_store import DisabledImageStore
from core.services.landing_service import (
    LandingService,
    is_valid_image_url,
    should_delete_old_image,
)

OLD_URL = "https://cdn/a.png"
NEW_URL = "https://cdn/b.png"


class TestGet:
    def test_returns_stored_landing(self, landing_service, seed_landing) -> None:
        seed_landing("owner_1", headline="Hello")

        landing = landing_service.get("owner_1")

        assert landing.owner_id == "owner_1"
        assert landing.headline == "Hello"

    def test_missing_landing_returns_empty_page(self, landing_service) -> None:
        landing = landing_service.get("owner_404")

        assert landing == LandingPage(owner_id="owner_404")
        assert landing.id is None


class TestNormalization:
    def test_trims_text_and_clears_blank_fields(self, landing_service, seed_landing) -> None:
        seed_landing("owner_1", headline="Old", email="me@example.com")

        landing = landing_service.upsert(
            "owner_1",
            LandingUpsert(headline="  New headline  ", email="   ", website_url=""),
        )

        assert landing.headline == "New headline"
        assert landing.email is None
        assert landing.website_url is None

    def test_omitted_fields_keep_stored_values(self, landing_service, seed_landing) -> None:
        seed_landing("owner_1", headline="Old", description="Desc", youtube_url="https://yt/x")

        landing = landing_service.upsert("owner_1", LandingUpsert(headline="New"))

        assert landing.headline == "New"
        assert landing.description == "Desc"
        assert landing.youtube_url == "https://yt/x"

    def test_explicit_null_clears_field(self, landing_service, seed_landing) -> None:
        seed_landing("owner_1", description="Desc")

        landing = landing_service.upsert(
            "owner_1",
            LandingUpsert.model_validate({"description": None}),
        )

        assert landing.description is None

    def test_first_upsert_creates_landing(self, landing_service, landing_repository) -> None:
        landing = landing_service.upsert("owner_new", LandingUpsert(headline="Hi"))

        assert landing.id is not None
        assert landing.created_at is not None
        assert landing_repository.get_by_owner(owner_id="owner_new") == landing


class TestKeyRetention:
    def test_metadata_only_update_keeps_image(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert("owner_1", LandingUpsert(headline="hi"))

        assert landing.headline == "hi"
        assert landing.image_url == OLD_URL
        assert landing.image_key == "k1"
        assert recording_cleaner.scheduled == []

    def test_same_url_without_key_carries_over_key(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert("owner_1", LandingUpsert(image_url=OLD_URL))

        assert landing.image_key == "k1"
        assert recording_cleaner.scheduled == []

    def test_same_url_with_blank_key_carries_over_key(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert(
            "owner_1", LandingUpsert(image_url=f"  {OLD_URL} ", image_key="  ")
        )

        assert landing.image_url == OLD_URL
        assert landing.image_key == "k1"
        assert recording_cleaner.scheduled == []

    def test_same_url_with_new_key_replaces_and_deletes_old(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert(
            "owner_1", LandingUpsert(image_url=OLD_URL, image_key="k2")
        )

        assert landing.image_key == "k2"
        assert recording_cleaner.scheduled == ["k1"]

    def test_new_key_alone_replaces_key_for_stored_url(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert("owner_1", LandingUpsert(image_key="k2"))

        assert landing.image_url == OLD_URL
        assert landing.image_key == "k2"
        assert recording_cleaner.scheduled == ["k1"]


class TestImageReplacement:
    def test_changed_image_stores_new_key_and_deletes_old(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert(
            "owner_1", LandingUpsert(image_url=NEW_URL, image_key="k2")
        )

        assert landing.image_url == NEW_URL
        assert landing.image_key == "k2"
        assert recording_cleaner.scheduled == ["k1"]

    def test_first_image_does_not_schedule_delete(
        self, landing_service, recording_cleaner
    ) -> None:
        landing = landing_service.upsert(
            "owner_1", LandingUpsert(image_url=NEW_URL, image_key="k2")
        )

        assert landing.image_key == "k2"
        assert recording_cleaner.scheduled == []

    def test_replacing_url_with_same_key_does_not_delete(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing_service.upsert("owner_1", LandingUpsert(image_url=NEW_URL, image_key="k1"))

        assert recording_cleaner.scheduled == []


class TestImageClearing:
    def test_null_url_clears_url_and_key(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert(
            "owner_1", LandingUpsert.model_validate({"image_url": None})
        )

        assert landing.image_url is None
        assert landing.image_key is None
        assert recording_cleaner.scheduled == ["k1"]

    def test_cleared_url_ignores_supplied_key(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        landing = landing_service.upsert(
            "owner_1", LandingUpsert(image_url="   ", image_key="k9")
        )

        assert landing.image_url is None
        assert landing.image_key is None
        assert recording_cleaner.scheduled == ["k1"]

    def test_key_without_url_is_never_persisted(
        self, landing_service, landing_repository
    ) -> None:
        landing = landing_service.upsert("owner_1", LandingUpsert(image_key="k1"))

        assert landing.image_key is None
        stored = landing_repository.get_by_owner(owner_id="owner_1")
        assert stored is not None
        assert stored.image_key is None

    def test_clearing_without_previous_key_schedules_nothing(
        self, landing_service, seed_landing, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL)

        landing_service.upsert("owner_1", LandingUpsert.model_validate({"image_url": None}))

        assert recording_cleaner.scheduled == []


class TestValidation:
    @pytest.mark.parametrize(
        "image_url",
        [
            "http://cdn/a.png",
            "https:///a.png",
            "ftp://cdn/a.png",
            "cdn/a.png",
            "https://[::1/a.png",
            "https://exa mple.com/a.png",
            "https://cdn<x>/a.png",
            "https://cd\nn/a.png",
        ],
    )
    def test_rejects_non_https_or_hostless_url(
        self, landing_service, landing_repository, image_url
    ) -> None:
        with patch.object(landing_repository, "upsert_by_owner") as mock_upsert:
            with pytest.raises(InvalidImageURLError):
                landing_service.upsert(
                    "owner_1", LandingUpsert(image_url=image_url, image_key="k1")
                )

        mock_upsert.assert_not_called()

    def test_new_url_without_key_fails_without_write(
        self, landing_service, seed_landing, landing_repository, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        with patch.object(landing_repository, "upsert_by_owner") as mock_upsert:
            with pytest.raises(MissingImageKeyError):
                landing_service.upsert("owner_1", LandingUpsert(image_url=NEW_URL))

        mock_upsert.assert_not_called()
        assert recording_cleaner.scheduled == []

    def test_first_url_without_key_fails(self, landing_service) -> None:
        with pytest.raises(MissingImageKeyError):
            landing_service.upsert("owner_1", LandingUpsert(image_url=NEW_URL))

    def test_url_added_to_record_without_image_requires_key(
        self, landing_service, seed_landing
    ) -> None:
        seed_landing("owner_1", headline="No image yet")

        with pytest.raises(MissingImageKeyError):
            landing_service.upsert("owner_1", LandingUpsert(image_url=NEW_URL))

    def test_persistence_failure_does_not_delete_old_image(
        self, landing_service, seed_landing, landing_repository, recording_cleaner
    ) -> None:
        seed_landing("owner_1", image_url=OLD_URL, image_key="k1")

        with patch.object(
            landing_repository, "upsert_by_owner", side_effect=RuntimeError("db down")
        ):
            with pytest.raises(RuntimeError):
                landing_service.upsert(
                    "owner_1", LandingUpsert(image_url=NEW_URL, image_key="k2")
                )

        assert recording_cleaner.scheduled == []


class TestUploadImage:
    def test_upload_delegates_to_image_store(self, landing_service, image_store) -> None:
        uploaded = landing_service.upload_image(
            "owner_1",
            filename="hero.png",
            content_type="image/png",
            data=b"\x89PNG\r\n\x1a\ndata",
        )

        assert uploaded.image_url.endswith(uploaded.image_key)
        assert image_store.contains(uploaded.image_key)

    def test_upload_disabled(self, landing_repository, recording_cleaner) -> None:
        service = LandingService(
            landing_repository, DisabledImageStore(), cleaner=recording_cleaner
        )

        with pytest.raises(UploadDisabledError):
            service.upload_image(
                "owner_1", filename="a.png", content_type="image/png", data=b"x"
            )

    def test_disabled_store_accepts_replacement_keys(self, landing_repository) -> None:
        service = LandingService(landing_repository, DisabledImageStore())
        service.upsert("owner_1", LandingUpsert(image_url=OLD_URL, image_key="k1"))

        landing = service.upsert("owner_1", LandingUpsert(image_url=NEW_URL, image_key="k2"))

        assert landing.image_url == NEW_URL
        assert landing.image_key == "k2"


class TestHelpers:
    @pytest.mark.parametrize(
        ("old_key", "new_key", "expected"),
        [
            (None, None, False),
            ("", "k2", False),
            ("k1", None, True),
            ("k1", "", True),
            ("k1", "k2", True),
            ("k1", "k1", False),
        ],
    )
    def test_should_delete_old_image(self, old_key, new_key, expected) -> None:
        assert should_delete_old_image(old_key, new_key) is expected

    def test_is_valid_image_url(self) -> None:
        assert is_valid_image_url("https://cdn.example.com/a.png") is True
        assert is_valid_image_url("https://cdn.example.com:8443/a.png") is True
        assert is_valid_image_url("https://") is False
        assert is_valid_image_url("") is False


class TestOwnerLocks:
    def test_same_owner_shares_lock_while_held(self, landing_service) -> None:
        lock = landing_service._lock_for("owner_1")

        assert landing_service._lock_for("owner_1") is lock
        assert landing_service._lock_for("owner_2") is not lock

    def test_locks_are_released_after_upserts(self, landing_service) -> None:
        for index in range(1000):
            landing_service.upsert(f"owner_{index}", LandingUpsert(headline="Hi"))

        assert len(landing_service._owner_locks) == 0
