"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, NamedTuple

from aws_lambda_powertools import Logger

from core.models.errors import (
    LandingServiceError,
    NotFoundError,
    RemoteProtocolError,
    RemoteRequestFailedError,
    UploadDisabledError,
    ValidationError,
)
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

TECHNICAL_DIFFICULTIES = (
    "We're experiencing technical difficulties. Please try again in a few moments."
)


class ErrorMapping(NamedTuple):
    """How one family of domain errors is answered.

    ``public_message`` of None echoes the exception message, which is only
    done for errors that describe the caller's own input.
    """

    error_type: type[LandingServiceError]
    status: HTTPStatus
    log_message: str
    public_message: str | None
    log_level: str = "warning"


# First match wins, so subclasses come before their bases.
ERROR_MAPPINGS: tuple[ErrorMapping, ...] = (
    ErrorMapping(ValidationError, HTTPStatus.BAD_REQUEST, "Rejected invalid input", None),
    ErrorMapping(
        NotFoundError,
        HTTPStatus.NOT_FOUND,
        "Resource not found",
        "The requested resource was not found.",
    ),
    ErrorMapping(
        UploadDisabledError,
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Image store is not configured",
        "Image upload is not available.",
    ),
    ErrorMapping(
        RemoteProtocolError,
        HTTPStatus.BAD_GATEWAY,
        "Image store returned a malformed response",
        "Failed to upload image. Please try again later.",
        "exception",
    ),
    ErrorMapping(
        RemoteRequestFailedError,
        HTTPStatus.BAD_GATEWAY,
        "Image store request failed",
        "Failed to upload image. Please try again later.",
        "exception",
    ),
    ErrorMapping(
        LandingServiceError,
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "Landing service error",
        TECHNICAL_DIFFICULTIES,
        "exception",
    ),
)


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Preserves specific validation messages while making generic errors friendly.
    """
    exc_str = str(exc)

    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Required",
        "Must",
        "Unable to",
        "File",
        "image_url",
        "image_key",
    )

    if exc_str and exc_str.startswith(friendly_prefixes):
        return exc_str

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    return "We encountered an issue processing your request. Please try again."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """Log an error with the handler, request and domain error context."""
    log_extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if isinstance(exc, LandingServiceError):
        log_extra["error_code"] = exc.error_code
        log_extra["details"] = exc.details

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def _domain_error_response(
    exc: LandingServiceError,
    *,
    handler_name: str,
    request_id: str | None,
    cors_origin: str | None,
) -> JsonDict:
    mapping = next(m for m in ERROR_MAPPINGS if isinstance(exc, m.error_type))

    _log_error(
        mapping.log_message,
        handler_name=handler_name,
        request_id=request_id,
        exc=exc,
        level=mapping.log_level,
    )
    # Provider details stay in the logs; only the error code reaches the client.
    return ResponseBuilder.error(
        mapping.status,
        mapping.public_message or exc.message,
        error=exc.error_code,
        request_id=request_id,
        cors_origin=cors_origin,
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Translation of landing service errors through ``ERROR_MAPPINGS``
    - Request ID tracking and structured logging
    - User-friendly messages for anything else

    Example:
        @api_gateway_handler
        def handler(event, context):
            return {"statusCode": 200, "body": "Success"}
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except LandingServiceError as exc:
            return _domain_error_response(
                exc,
                handler_name=func.__name__,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                _get_user_friendly_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.error(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                TECHNICAL_DIFFICULTIES,
                error=ERROR_CODE_INTERNAL_ERROR,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
