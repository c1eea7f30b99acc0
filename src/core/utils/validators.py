"""Request body validation for landing handlers."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.utils.response import JsonDict, ResponseBuilder

ModelT = TypeVar("ModelT", bound=BaseModel)

# (substring of the lowercased pydantic message, message shown to clients)
MESSAGE_REWRITES: tuple[tuple[str, str], ...] = (
    ("base64", "File must be a valid Base64-encoded string"),
    ("field required", "This field is required"),
    ("valid string", "Value must be a string or null"),
    ("valid dictionary", "Request body must be a JSON object"),
)


def _public_message(raw: str) -> str:
    message = raw.replace("Value error,", "").strip()
    lowered = message.lower()
    for needle, replacement in MESSAGE_REWRITES:
        if needle in lowered:
            return replacement
    return message


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic errors to ``{"field", "message"}`` pairs.

    Input values, context and documentation URLs are dropped so request
    content is never echoed back. Errors without a location refer to the
    whole body.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": _public_message(err.get("msg", "Invalid value")),
        }
        for err in errors
    ]


def validate_request(
    model: type[ModelT],
    data: Any,
    *,
    request_id: str | None = None,
    cors_origin: str | None = None,
) -> tuple[bool, ModelT | JsonDict]:
    """Validate a decoded request body against ``model``.

    Returns:
        (True, validated_model) on success
        (False, 422 response) on validation failure
    """
    try:
        return True, model.model_validate(data)
    except ValidationError as exc:
        return False, ResponseBuilder.validation_error(
            details=sanitize_validation_errors(exc.errors()),
            request_id=request_id,
            cors_origin=cors_origin,
        )
