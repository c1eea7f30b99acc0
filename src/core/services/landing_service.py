"""Business logic for landing pages and their images.

This module owns the reconciliation policy applied on every landing update:
it normalizes input, decides whether the stored image key is kept, replaced
or cleared, validates image fields, persists the result, and hands orphaned
image keys to the background cleaner.
"""

import threading
import weakref
from urllib.parse import urlsplit

from aws_lambda_powertools import Logger
from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import InvalidImageURLError, MissingImageKeyError
from core.models.landing import LandingPage, LandingUpsert, UploadedImage
from core.repositories.image_store import ImageStore
from core.repositories.landing_repository import LandingRepository
from core.services.orphan_cleanup import OrphanImageCleaner
from core.utils.constants import LANDING_TEXT_FIELDS
from core.utils.normalize import normalize_optional_text

logger = Logger(UTC=True)

_IMAGE_URL = TypeAdapter(HttpUrl)


def is_valid_image_url(value: str) -> bool:
    """Return True for absolute https URLs with a valid, non-empty host.

    The raw value is what gets stored, so whitespace and control characters
    are refused even where the URL parser would drop them.
    """
    if any(ch.isspace() or not ch.isprintable() for ch in value):
        return False

    try:
        # "https:///a.png" normalizes to host "a.png"; the authority must be explicit.
        if not urlsplit(value).hostname:
            return False
        url = _IMAGE_URL.validate_python(value)
    except (ValueError, PydanticValidationError):
        return False

    return url.scheme == "https" and bool(url.host)


def should_delete_old_image(old_key: str | None, new_key: str | None) -> bool:
    """Return True when ``old_key`` is no longer referenced after the update."""
    if not old_key:
        return False
    if not new_key:
        return True
    return old_key != new_key


def validate_image_fields(
    image_url: str | None,
    image_key: str | None,
    *,
    requires_image_key: bool,
) -> None:
    """Check image_url/image_key consistency.

    Raises:
        InvalidImageURLError: If image_url is not an https URL with a host
        MissingImageKeyError: If a new image_url arrives without a key
    """
    if image_url is None:
        return

    if not is_valid_image_url(image_url):
        raise InvalidImageURLError(details={"image_url": image_url})

    if requires_image_key and image_key is None:
        raise MissingImageKeyError(details={"image_url": image_url})


class LandingService:
    """Application service responsible for landing pages.

    This service orchestrates:
    - Reading the landing page of an owner
    - Reconciling partial updates with the stored image key
    - Uploading new images through the configured image store
    - Scheduling deletion of images that are no longer referenced

    Upserts for the same owner are serialized within the process so the
    read-decide-write sequence sees a consistent baseline.
    """

    def __init__(
        self,
        repository: LandingRepository,
        image_store: ImageStore,
        *,
        cleaner: OrphanImageCleaner | None = None,
    ) -> None:
        self.repository = repository
        self.image_store = image_store
        self.cleaner = cleaner or OrphanImageCleaner(image_store)
        # Entries disappear once no upsert holds or waits on the lock.
        self._owner_locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, owner_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._owner_locks.get(owner_id)
            if lock is None:
                lock = threading.Lock()
                self._owner_locks[owner_id] = lock
            return lock

    def get(self, owner_id: str) -> LandingPage:
        """Return the owner's landing page, or an empty one if none exists."""
        landing = self.repository.get_by_owner(owner_id=owner_id)
        if landing is None:
            logger.debug("Landing not found, returning empty page", extra={"owner_id": owner_id})
            return LandingPage(owner_id=owner_id)
        return landing

    def upsert(self, owner_id: str, update: LandingUpsert) -> LandingPage:
        """Apply a partial update to the owner's landing page.

        The flow is:
        1. Load the current record (absence is an empty baseline)
        2. Normalize supplied fields; omitted fields keep stored values
        3. Keep the stored image key when the image URL is unchanged
        4. Drop the image key when there is no image URL
        5. Validate image fields
        6. Persist the full record
        7. Schedule deletion of the previous image key if it became orphaned

        Raises:
            InvalidImageURLError: If image_url is not an https URL with a host
            MissingImageKeyError: If a new or changed image_url has no key
            DynamoDBError: If persistence fails
        """
        with self._lock_for(owner_id):
            existing = self.repository.get_by_owner(owner_id=owner_id)
            resolved = self._resolve(existing, update)

            validate_image_fields(
                resolved["image_url"],
                resolved["image_key"],
                requires_image_key=self._requires_image_key(existing, resolved["image_url"]),
            )

            updated = self.repository.upsert_by_owner(
                owner_id=owner_id,
                data=LandingUpsert(**resolved),
            )

        old_key = existing.image_key if existing else None
        if should_delete_old_image(old_key, updated.image_key):
            logger.info(
                "Landing image replaced, scheduling cleanup",
                extra={"owner_id": owner_id, "image_key": old_key},
            )
            self.cleaner.schedule(old_key)

        logger.info("Landing upserted", extra={"owner_id": owner_id})
        return updated

    def upload_image(
        self,
        owner_id: str,
        *,
        filename: str,
        content_type: str,
        data: bytes,
    ) -> UploadedImage:
        """Upload a landing image and return its public URL and storage key.

        Raises:
            UploadDisabledError: If no image store is configured
            RemoteProtocolError: If the provider response is malformed
            RemoteRequestFailedError: If a provider request fails
        """
        logger.debug(
            "Uploading landing image",
            extra={"owner_id": owner_id, "size": len(data), "content_type": content_type},
        )
        uploaded = self.image_store.upload(
            filename=filename,
            content_type=content_type,
            data=data,
        )
        logger.info(
            "Landing image uploaded",
            extra={"owner_id": owner_id, "image_key": uploaded.image_key},
        )
        return uploaded

    @staticmethod
    def _resolve(existing: LandingPage | None, update: LandingUpsert) -> dict[str, str | None]:
        resolved: dict[str, str | None] = {}
        for field in LANDING_TEXT_FIELDS:
            if update.supplied(field):
                resolved[field] = normalize_optional_text(getattr(update, field))
            elif field == "image_key":
                # Only an explicit key counts as "supplied"; retention below.
                resolved[field] = None
            else:
                resolved[field] = getattr(existing, field) if existing else None

        image_url = resolved["image_url"]
        if (
            existing is not None
            and image_url is not None
            and image_url == existing.image_url
            and resolved["image_key"] is None
        ):
            resolved["image_key"] = existing.image_key

        if image_url is None:
            resolved["image_key"] = None

        return resolved

    @staticmethod
    def _requires_image_key(existing: LandingPage | None, image_url: str | None) -> bool:
        if image_url is None:
            return False
        if existing is None or existing.image_url is None:
            return True
        return image_url != existing.image_url
