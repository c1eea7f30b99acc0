"""Resolve UploadThing credentials from the opaque ``UPLOADTHING_TOKEN``.

The token is base64-encoded JSON of the form ``{"apiKey": ..., "appId": ...}``.
Dashboards hand it out in several base64 dialects, so every dialect is tried
in a fixed order and the first one yielding both fields wins.
"""

import base64
import binascii
import os
from collections.abc import Callable

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ConfigurationError
from core.utils.constants import ENV_UPLOADTHING_TOKEN

logger = Logger(UTC=True)


class UploadThingCredentials(BaseModel):
    """API key and application id derived from the provider token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_key: str = Field(..., alias="apiKey", min_length=1)
    app_id: str = Field(..., alias="appId", min_length=1)


def _pad(token: str) -> str:
    return token + "=" * (-len(token) % 4)


def _decode_std(token: str) -> bytes:
    return base64.b64decode(token, validate=True)


def _decode_raw_std(token: str) -> bytes:
    if "=" in token:
        raise binascii.Error("unexpected padding in raw encoding")
    return base64.b64decode(_pad(token), validate=True)


def _decode_url(token: str) -> bytes:
    return base64.b64decode(token, altchars=b"-_", validate=True)


def _decode_raw_url(token: str) -> bytes:
    if "=" in token:
        raise binascii.Error("unexpected padding in raw encoding")
    return base64.b64decode(_pad(token), altchars=b"-_", validate=True)


TOKEN_DECODERS: tuple[tuple[str, Callable[[str], bytes]], ...] = (
    ("std", _decode_std),
    ("raw_std", _decode_raw_std),
    ("url", _decode_url),
    ("raw_url", _decode_raw_url),
)


def decode_token(token: str) -> UploadThingCredentials:
    """Decode a provider token into credentials.

    Raises:
        ConfigurationError: If the token is blank or no encoding variant
            yields both an API key and an application id
    """
    cleaned = token.strip().strip("\"'")
    if not cleaned:
        raise ConfigurationError(message=f"{ENV_UPLOADTHING_TOKEN} is required")

    failures: dict[str, str] = {}
    for variant, decode in TOKEN_DECODERS:
        try:
            raw = decode(cleaned)
        except (binascii.Error, ValueError) as exc:
            failures[variant] = str(exc)
            continue

        try:
            return UploadThingCredentials.model_validate_json(raw)
        except PydanticValidationError as exc:
            failures[variant] = f"{exc.error_count()} invalid credential field(s)"

    raise ConfigurationError(
        message=f"Failed to decode {ENV_UPLOADTHING_TOKEN}",
        details={"attempts": failures},
    )


def load_credentials_from_env() -> UploadThingCredentials | None:
    """Read credentials from the environment.

    Returns None when the token is not set at all, which leaves image
    uploads disabled.

    Raises:
        ConfigurationError: If the token is set but cannot be decoded
    """
    token = os.getenv(ENV_UPLOADTHING_TOKEN, "")
    if not token.strip().strip("\"'"):
        logger.warning(
            "UploadThing token not configured; image uploads are disabled",
            extra={"env": ENV_UPLOADTHING_TOKEN},
        )
        return None

    credentials = decode_token(token)
    logger.info("UploadThing credentials resolved", extra={"app_id": credentials.app_id})
    return credentials
