"""Abstract contract for landing image storage."""

from abc import ABC, abstractmethod

from core.models.errors import UploadDisabledError
from core.models.landing import UploadedImage


class ImageStore(ABC):
    """Capability to upload images and delete them by storage key.

    Implementations could be UploadThing, in-memory, etc.
    The landing service depends on this interface, not the implementation.
    """

    @abstractmethod
    def upload(self, *, filename: str, content_type: str, data: bytes) -> UploadedImage:
        """Upload image bytes and return their public URL and storage key.

        Raises:
            UploadDisabledError: If no image store is configured
            ValidationError: If the payload is empty
            RemoteProtocolError: If the provider response is malformed
            RemoteRequestFailedError: If a provider request fails
        """

    @abstractmethod
    def delete(self, *, key: str) -> None:
        """Delete the object stored under ``key``.

        A blank key is a no-op. Deleting an object that no longer exists is
        not required to fail.

        Raises:
            RemoteRequestFailedError: If every delete attempt fails
        """


class DisabledImageStore(ImageStore):
    """Image store used when no provider is configured."""

    def upload(self, *, filename: str, content_type: str, data: bytes) -> UploadedImage:
        raise UploadDisabledError(details={"filename": filename})

    def delete(self, *, key: str) -> None:
        return None
