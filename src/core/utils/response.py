"""
API Gateway proxy responses for the landing endpoints.

Every body is a JSON object. Error bodies share one envelope:
``{"error": <code>, "message": ..., "timestamp": ..., "details"?: ..., "request_id"?: ...}``.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]
ErrorDetails = JsonDict | list[Any]

DEFAULT_ERROR_MESSAGES: dict[HTTPStatus, str] = {
    HTTPStatus.BAD_REQUEST: "Bad request",
    HTTPStatus.UNAUTHORIZED: "Unauthorized",
    HTTPStatus.NOT_FOUND: "Resource not found",
    HTTPStatus.UNPROCESSABLE_ENTITY: "Invalid request payload",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal server error",
    HTTPStatus.BAD_GATEWAY: "Upstream service failed",
    HTTPStatus.SERVICE_UNAVAILABLE: "Service unavailable",
}


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    @staticmethod
    def headers(cors_origin: str | None = None) -> dict[str, str]:
        return {
            "Content-Type": DEFAULT_CONTENT_TYPE,
            "Access-Control-Allow-Origin": cors_origin or CORS_ORIGIN,
            "Access-Control-Allow-Headers": CORS_HEADERS,
            "Access-Control-Allow-Methods": CORS_METHODS,
        }

    @staticmethod
    def build(
        status: HTTPStatus,
        body: JsonDict | None = None,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = dict(body or {})
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": ResponseBuilder.headers(cors_origin),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(body: JsonDict, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.build(HTTPStatus.OK, body, **kwargs)

    @staticmethod
    def created(body: JsonDict, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.build(HTTPStatus.CREATED, body, **kwargs)

    @staticmethod
    def no_content(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder.headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        status: HTTPStatus,
        message: str | None = None,
        *,
        error: str | None = None,
        details: ErrorDetails | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Build an error envelope; ``error`` defaults to the status name."""
        payload: JsonDict = {
            "error": error or status.name,
            "message": message or DEFAULT_ERROR_MESSAGES.get(status, status.phrase),
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return ResponseBuilder.build(
            status,
            payload,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_request(message: str, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(HTTPStatus.BAD_REQUEST, message, **kwargs)

    @staticmethod
    def unauthorized(message: str | None = None, **kwargs: Any) -> JsonDict:
        return ResponseBuilder.error(HTTPStatus.UNAUTHORIZED, message, **kwargs)

    @staticmethod
    def validation_error(
        *,
        details: ErrorDetails | None = None,
        message: str | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """422 Unprocessable Entity for payloads that fail model validation."""
        return ResponseBuilder.error(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            message,
            error=ERROR_CODE_VALIDATION_FAILED,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )
