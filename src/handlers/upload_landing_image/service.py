"""Upload gate for landing images.

Checks size and image type before any bytes reach the image store.
"""

from aws_lambda_powertools import Logger

from core.models.errors import FileSizeError, MIMETypeError, ValidationError
from core.models.landing import UploadedImage
from core.services.landing_service import LandingService
from core.utils.constants import ALLOWED_MIME_TYPES, MAX_FILE_SIZE, get_max_file_size_mb
from core.utils.mime import resolve_content_type

logger = Logger(UTC=True)


class ImageUploadService:
    """Application service validating and forwarding landing image uploads."""

    def __init__(self, landing_service: LandingService) -> None:
        self.landing_service = landing_service

    def upload(
        self,
        *,
        owner_id: str,
        file_name: str,
        declared_content_type: str | None,
        file_data: bytes,
    ) -> UploadedImage:
        """Validate an image and upload it for ``owner_id``.

        Raises:
            ValidationError: If the file is empty
            FileSizeError: If the file exceeds the size limit
            MIMETypeError: If the file is not JPEG, PNG or WebP
            UploadDisabledError: If no image store is configured
        """
        if not file_data:
            raise ValidationError(message="Image file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            raise FileSizeError(
                message=f"Image file exceeds {get_max_file_size_mb()}MB limit",
                details={"size": len(file_data)},
            )

        content_type = resolve_content_type(declared_content_type, file_data)
        if content_type not in ALLOWED_MIME_TYPES:
            logger.warning(
                "Unsupported MIME type",
                extra={"mime_type": content_type, "declared": declared_content_type},
            )
            raise MIMETypeError(
                message="Only JPEG, PNG, and WebP images are allowed",
                details={"mime_type": content_type},
            )

        return self.landing_service.upload_image(
            owner_id,
            filename=file_name,
            content_type=content_type,
            data=file_data,
        )
