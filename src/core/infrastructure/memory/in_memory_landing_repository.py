"""In-memory implementation of LandingRepository."""

import threading
import uuid

from core.models.landing import LandingPage, LandingUpsert
from core.repositories.landing_repository import LandingRepository
from core.utils.constants import LANDING_TEXT_FIELDS
from core.utils.time import utc_now_iso


class InMemoryLandingRepository(LandingRepository):
    """Dict-backed landing storage; each upsert is atomic under a lock."""

    def __init__(self) -> None:
        self._records: dict[str, LandingPage] = {}
        self._lock = threading.Lock()

    def get_by_owner(self, *, owner_id: str) -> LandingPage | None:
        with self._lock:
            record = self._records.get(owner_id)
            return record.model_copy() if record else None

    def upsert_by_owner(self, *, owner_id: str, data: LandingUpsert) -> LandingPage:
        now = utc_now_iso()
        fields = {name: getattr(data, name) for name in LANDING_TEXT_FIELDS}

        with self._lock:
            existing = self._records.get(owner_id)
            record = LandingPage(
                id=existing.id if existing else f"lnd_{uuid.uuid4().hex}",
                owner_id=owner_id,
                created_at=existing.created_at if existing else now,
                updated_at=now,
                **fields,
            )
            self._records[owner_id] = record
            return record.model_copy()
