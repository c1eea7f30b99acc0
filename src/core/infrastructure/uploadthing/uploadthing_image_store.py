"""UploadThing-backed implementation of ImageStore."""

from enum import Enum
from typing import Any

import requests
from aws_lambda_powertools import Logger

from core.infrastructure.adapters.uploadthing_adapter import (
    UploadThingAdapter,
    UploadThingAdapterProtocol,
)
from core.infrastructure.uploadthing.credentials import UploadThingCredentials
from core.models.errors import (
    RemoteProtocolError,
    RemoteRequestFailedError,
    ValidationError,
)
from core.models.landing import UploadedImage
from core.repositories.image_store import ImageStore
from core.utils.constants import (
    DEFAULT_UPLOAD_CONTENT_TYPE,
    UPLOADTHING_CDN_URL_TEMPLATE,
    UPLOADTHING_DELETE_PATHS,
    UPLOADTHING_KEY_TYPE,
)
from core.utils.filenames import sanitize_filename

logger = Logger(UTC=True)

MAX_ERROR_BODY_LENGTH = 500


class UploadStage(str, Enum):
    """Stages of a single upload; any failure is terminal."""

    IDLE = "idle"
    NEGOTIATING = "negotiating"
    TRANSFERRING = "transferring"
    COMPLETE = "complete"
    FAILED = "failed"


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _status_text(response: requests.Response) -> str:
    return f"{response.status_code} {response.reason or ''}".strip()


def _trimmed_body(response: requests.Response) -> str:
    return (response.text or "").strip()[:MAX_ERROR_BODY_LENGTH]


class UploadThingImageStore(ImageStore):
    """Image store backed by the UploadThing API.

    Uploads are a two step exchange: negotiate a presigned target, then PUT
    the bytes to it. Deletes are sent to each versioned endpoint in turn
    until one succeeds.
    """

    def __init__(
        self,
        credentials: UploadThingCredentials,
        adapter: UploadThingAdapterProtocol | None = None,
    ) -> None:
        """Create storage using the provided credentials and adapter."""
        self._app_id = credentials.app_id
        self._api = adapter or UploadThingAdapter(api_key=credentials.api_key)

    def public_url(self, key: str) -> str:
        return UPLOADTHING_CDN_URL_TEMPLATE.format(app_id=self._app_id, key=key)

    def upload(self, *, filename: str, content_type: str, data: bytes) -> UploadedImage:
        """Upload image bytes and return their public URL and file key."""
        if not data:
            raise ValidationError(message="File must not be empty")

        file_name = sanitize_filename(filename)
        file_type = (content_type or "").strip()

        logger.debug(
            "Uploading landing image",
            extra={
                "file_name": file_name,
                "content_type": file_type,
                "size": len(data),
                "stage": UploadStage.NEGOTIATING.value,
            },
        )

        upload_url, file_key = self._negotiate(
            file_name=file_name,
            file_type=file_type,
            file_size=len(data),
        )

        logger.debug(
            "Upload target negotiated",
            extra={"file_key": file_key, "stage": UploadStage.TRANSFERRING.value},
        )

        self._transfer(
            url=upload_url,
            file_name=file_name,
            content_type=file_type or DEFAULT_UPLOAD_CONTENT_TYPE,
            data=data,
            file_key=file_key,
        )

        logger.info(
            "Image uploaded successfully",
            extra={"file_key": file_key, "stage": UploadStage.COMPLETE.value},
        )
        return UploadedImage(image_url=self.public_url(file_key), image_key=file_key)

    def _negotiate(self, *, file_name: str, file_type: str, file_size: int) -> tuple[str, str]:
        stage_details = {"stage": UploadStage.NEGOTIATING.value, "file_name": file_name}

        try:
            response = self._api.prepare_upload(
                file_name=file_name,
                file_size=file_size,
                file_type=file_type,
            )
        except requests.RequestException as exc:
            logger.error("UploadThing prepare request failed", extra=stage_details)
            raise RemoteRequestFailedError(
                message="Unable to prepare image upload",
                details=stage_details,
            ) from exc

        if not _is_success(response):
            logger.error(
                "UploadThing prepare rejected",
                extra={**stage_details, "status": response.status_code},
            )
            raise RemoteRequestFailedError(
                message="Unable to prepare image upload",
                details={
                    **stage_details,
                    "status": _status_text(response),
                    "body": _trimmed_body(response),
                },
            )

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise RemoteProtocolError(
                message="Upload preparation returned a malformed response",
                details=stage_details,
            ) from exc

        url = body.get("url") if isinstance(body, dict) else None
        key = body.get("key") if isinstance(body, dict) else None

        if not isinstance(url, str) or not url or not isinstance(key, str) or not key:
            logger.error("UploadThing prepare returned missing url/key", extra=stage_details)
            raise RemoteProtocolError(
                message="Upload preparation returned missing url/key",
                details=stage_details,
            )

        return url, key

    def _transfer(
        self,
        *,
        url: str,
        file_name: str,
        content_type: str,
        data: bytes,
        file_key: str,
    ) -> None:
        stage_details = {"stage": UploadStage.TRANSFERRING.value, "file_key": file_key}

        try:
            response = self._api.put_file(
                url=url,
                file_name=file_name,
                content_type=content_type,
                data=data,
            )
        except requests.RequestException as exc:
            logger.error("UploadThing transfer request failed", extra=stage_details)
            raise RemoteRequestFailedError(
                message="Unable to upload image",
                details=stage_details,
            ) from exc

        if not _is_success(response):
            logger.error(
                "UploadThing transfer rejected",
                extra={**stage_details, "status": response.status_code},
            )
            raise RemoteRequestFailedError(
                message="Unable to upload image",
                details={
                    **stage_details,
                    "status": _status_text(response),
                    "body": _trimmed_body(response),
                },
            )

    def delete(self, *, key: str) -> None:
        """Delete a file by key, falling back across endpoint versions."""
        key = (key or "").strip()
        if not key:
            return

        payload: dict[str, Any] = {
            "fileKeys": [key],
            "keys": [key],
            "keyType": UPLOADTHING_KEY_TYPE,
        }

        last_error: RemoteRequestFailedError | None = None
        for path in UPLOADTHING_DELETE_PATHS:
            try:
                response = self._api.delete_files(path=path, payload=payload)
            except requests.RequestException as exc:
                logger.warning(
                    "UploadThing delete request failed",
                    extra={"file_key": key, "path": path, "error": str(exc)},
                )
                last_error = RemoteRequestFailedError(
                    message="Unable to delete image",
                    details={"file_key": key, "path": path, "error": str(exc)},
                )
                last_error.__cause__ = exc
                continue

            if _is_success(response):
                logger.info("Image deleted successfully", extra={"file_key": key, "path": path})
                return

            logger.warning(
                "UploadThing delete rejected",
                extra={"file_key": key, "path": path, "status": response.status_code},
            )
            last_error = RemoteRequestFailedError(
                message="Unable to delete image",
                details={
                    "file_key": key,
                    "path": path,
                    "status": _status_text(response),
                    "body": _trimmed_body(response),
                },
            )

        if last_error is not None:
            raise last_error
