"""Pydantic models for landing image upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import MAX_FILE_SIZE, get_max_file_size_mb

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for landing image upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str = Field(..., description="Base64 encoded image file")
    file_name: str = Field(
        ..., min_length=1, max_length=255, description="Original image filename"
    )
    content_type: str | None = Field(
        None, max_length=255, description="Declared MIME type of the file"
    )

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must have non-zero size
        - must not exceed MAX_FILE_SIZE
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except binascii.Error as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            raise ValueError("Decoded file is empty")

        if len(file_data) > MAX_FILE_SIZE:
            logger.error("File size validation error: File size exceeds limit")
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value

    def decoded_file(self) -> bytes:
        return base64.b64decode(self.file)


class ImageUploadResponse(BaseModel):
    """Response model for a successful landing image upload."""

    image_url: str = Field(..., description="Public URL of the uploaded image")
    image_key: str = Field(..., description="Storage key to send back with image_url")
    message: str = Field(..., description="Success message")
