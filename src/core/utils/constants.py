"""Global constants used throughout the application.

This module centralizes error codes, upload constraints, provider protocol
values and environment variable names so they can be changed in one place.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_IMAGE_URL = "INVALID_IMAGE_URL"
ERROR_CODE_MISSING_IMAGE_KEY = "MISSING_IMAGE_KEY"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Image Store Errors
ERROR_CODE_UPLOAD_DISABLED = "UPLOAD_DISABLED"
ERROR_CODE_REMOTE_PROTOCOL_ERROR = "REMOTE_PROTOCOL_ERROR"
ERROR_CODE_REMOTE_REQUEST_FAILED = "REMOTE_REQUEST_FAILED"
ERROR_CODE_CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

# Persistence / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_LANDING_FETCH_FAILED = "LANDING_FETCH_FAILED"
ERROR_CODE_LANDING_UPSERT_FAILED = "LANDING_UPSERT_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Landing Image Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(
    {"image/jpeg", "image/png", "image/webp"}
)

DEFAULT_UPLOAD_FILENAME = "image.jpg"
DEFAULT_UPLOAD_CONTENT_TYPE = "application/octet-stream"

# ============================================================================
# Landing Fields
# ============================================================================

LANDING_TEXT_FIELDS: Final[tuple[str, ...]] = (
    "headline",
    "description",
    "image_url",
    "image_key",
    "whatsapp_url",
    "facebook_url",
    "instagram_url",
    "youtube_url",
    "email",
    "website_url",
)

# ============================================================================
# UploadThing Protocol
# ============================================================================

UPLOADTHING_API_ROOT = "https://api.uploadthing.com"
UPLOADTHING_API_KEY_HEADER = "x-uploadthing-api-key"
UPLOADTHING_PREPARE_UPLOAD_PATH = "/v7/prepareUpload"
UPLOADTHING_DELETE_PATHS: Final[tuple[str, ...]] = (
    "/v6/deleteFiles",
    "/v7/deleteFiles",
)
UPLOADTHING_KEY_TYPE = "fileKey"
UPLOADTHING_CDN_URL_TEMPLATE = "https://{app_id}.ufs.sh/f/{key}"
UPLOADTHING_REQUEST_TIMEOUT_SECONDS = 30

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_LANDING_TABLE_NAME = "LANDING_TABLE_NAME"
ENV_UPLOADTHING_TOKEN = "UPLOADTHING_TOKEN"
ENV_UPLOADTHING_API_ROOT = "UPLOADTHING_API_ROOT"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
