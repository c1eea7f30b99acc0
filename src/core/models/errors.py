"""Custom exception classes for the landing service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION_ERROR,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_INVALID_IMAGE_URL,
    ERROR_CODE_MISSING_IMAGE_KEY,
    ERROR_CODE_REMOTE_PROTOCOL_ERROR,
    ERROR_CODE_REMOTE_REQUEST_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_UPLOAD_DISABLED,
    ERROR_CODE_VALIDATION_FAILED,
)


class LandingServiceError(Exception):
    """
    Base exception for all landing service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(LandingServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidImageURLError(ValidationError):
    """Raised when image_url is not an absolute https URL with a host."""

    def __init__(
        self,
        *,
        message: str = "image_url must be a valid https URL",
        error_code: str = ERROR_CODE_INVALID_IMAGE_URL,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MissingImageKeyError(ValidationError):
    """Raised when a new image_url is set without its storage key."""

    def __init__(
        self,
        *,
        message: str = "image_key is required when image_url is set",
        error_code: str = ERROR_CODE_MISSING_IMAGE_KEY,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UNSUPPORTED_MIME_TYPE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class FileSizeError(ValidationError):
    """Raised when file size exceeds the allowed limit."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_FILE_SIZE_EXCEEDED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(LandingServiceError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_RESOURCE_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UploadDisabledError(LandingServiceError):
    """Raised when an upload is attempted without a configured image store."""

    def __init__(
        self,
        *,
        message: str = "image upload is not configured",
        error_code: str = ERROR_CODE_UPLOAD_DISABLED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RemoteProtocolError(LandingServiceError):
    """Raised when the storage provider returns a malformed response."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_REMOTE_PROTOCOL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RemoteRequestFailedError(LandingServiceError):
    """Raised when a storage provider request fails or returns non-2xx."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_REMOTE_REQUEST_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(LandingServiceError):
    """Raised at startup when provider credentials cannot be resolved."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class DynamoDBError(LandingServiceError):
    """Raised when a DynamoDB operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DYNAMODB,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
