"""Thin adapter for interacting with the UploadThing REST API."""

import os
from typing import Any, Protocol

import requests

from core.utils.constants import (
    ENV_UPLOADTHING_API_ROOT,
    UPLOADTHING_API_KEY_HEADER,
    UPLOADTHING_API_ROOT,
    UPLOADTHING_PREPARE_UPLOAD_PATH,
    UPLOADTHING_REQUEST_TIMEOUT_SECONDS,
)


class UploadThingAdapterProtocol(Protocol):
    """Minimal UploadThing adapter protocol (image-store-facing)."""

    def prepare_upload(
        self,
        *,
        file_name: str,
        file_size: int,
        file_type: str,
    ) -> requests.Response: ...

    def put_file(
        self,
        *,
        url: str,
        file_name: str,
        content_type: str,
        data: bytes,
    ) -> requests.Response: ...

    def delete_files(self, *, path: str, payload: dict[str, Any]) -> requests.Response: ...


class UploadThingAdapter:
    """Low-level UploadThing HTTP calls (mechanical, no error handling).

    This adapter:
    - Wraps a requests session carrying the API key header
    - Does NOT inspect status codes or bodies
    - Lets transport exceptions bubble up
    - Domain implementations check responses and translate errors
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_root: str | None = None,
        timeout: float = UPLOADTHING_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Create an adapter bound to one API key."""
        root = api_root or os.getenv(ENV_UPLOADTHING_API_ROOT) or UPLOADTHING_API_ROOT
        self._api_root = root.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({UPLOADTHING_API_KEY_HEADER: api_key})

    @property
    def api_root(self) -> str:
        return self._api_root

    def prepare_upload(
        self,
        *,
        file_name: str,
        file_size: int,
        file_type: str,
    ) -> requests.Response:
        """Ask UploadThing for a presigned upload target.

        Raises requests exceptions - caught by domain implementation.
        """
        payload: dict[str, Any] = {"fileName": file_name, "fileSize": file_size}
        if file_type:
            payload["fileType"] = file_type

        return self._session.post(
            f"{self._api_root}{UPLOADTHING_PREPARE_UPLOAD_PATH}",
            json=payload,
            timeout=self._timeout,
        )

    def put_file(
        self,
        *,
        url: str,
        file_name: str,
        content_type: str,
        data: bytes,
    ) -> requests.Response:
        """Send the file as a single multipart part named ``file``.

        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.put(
            url,
            files={"file": (file_name, data, content_type)},
            timeout=self._timeout,
        )

    def delete_files(self, *, path: str, payload: dict[str, Any]) -> requests.Response:
        """POST a delete request to one versioned endpoint path.

        Raises requests exceptions - caught by domain implementation.
        """
        return self._session.post(
            f"{self._api_root}{path}",
            json=payload,
            timeout=self._timeout,
        )
