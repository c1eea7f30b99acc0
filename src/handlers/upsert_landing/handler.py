"""
Lambda handler creating or updating the authenticated owner's landing page.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.factory import get_landing_service
from core.models.errors import InvalidImageURLError, MissingImageKeyError
from core.models.landing import LandingUpsert
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_owner_id, parse_json_body
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request
from handlers.get_landing.models import LandingResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle landing page upsert requests.

    The JSON body is a partial update: omitted fields keep their stored
    values and null or blank fields clear them. A new image_url must come
    with the image_key returned by the upload endpoint.

    Args:
        event: API Gateway Lambda proxy event containing the update
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the stored landing page
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received landing upsert request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    owner_id = get_owner_id(event)
    if owner_id is None:
        return ResponseBuilder.unauthorized(request_id=request_id)

    try:
        body = parse_json_body(event)
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request("Invalid JSON body", request_id=request_id)

    is_valid, result = validate_request(LandingUpsert, body, request_id=request_id)
    if not is_valid:
        return result

    try:
        landing = get_landing_service().upsert(owner_id, result)
    except (InvalidImageURLError, MissingImageKeyError) as exc:
        logger.warning(
            "Rejected landing image data",
            extra={"owner_id": owner_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.bad_request(
            "Invalid image data",
            error=exc.error_code,
            details={"reason": exc.message},
            request_id=request_id,
        )

    return ResponseBuilder.ok(
        LandingResponse(landing=landing).model_dump(),
        request_id=request_id,
    )
