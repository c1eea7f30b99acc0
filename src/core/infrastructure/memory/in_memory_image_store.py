"""In-memory implementation of ImageStore for tests and local runs."""

import threading
import uuid

from aws_lambda_powertools import Logger

from core.models.errors import ValidationError
from core.models.landing import UploadedImage
from core.repositories.image_store import ImageStore
from core.utils.filenames import sanitize_filename

logger = Logger(UTC=True)


class InMemoryImageStore(ImageStore):
    """Keeps uploaded objects in a dict keyed by generated file key."""

    def __init__(self, *, base_url: str = "https://images.local/f") -> None:
        self._base_url = base_url.rstrip("/")
        self._objects: dict[str, tuple[str, str, bytes]] = {}
        self._deleted: list[str] = []
        self._lock = threading.Lock()

    @staticmethod
    def generate_key() -> str:
        return f"key_{uuid.uuid4().hex}"

    def upload(self, *, filename: str, content_type: str, data: bytes) -> UploadedImage:
        if not data:
            raise ValidationError(message="File must not be empty")

        key = self.generate_key()
        with self._lock:
            self._objects[key] = (sanitize_filename(filename), content_type, data)

        logger.debug("Image stored in memory", extra={"file_key": key, "size": len(data)})
        return UploadedImage(image_url=f"{self._base_url}/{key}", image_key=key)

    def delete(self, *, key: str) -> None:
        key = (key or "").strip()
        if not key:
            return

        with self._lock:
            self._objects.pop(key, None)
            self._deleted.append(key)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._objects

    @property
    def deleted_keys(self) -> list[str]:
        with self._lock:
            return list(self._deleted)
