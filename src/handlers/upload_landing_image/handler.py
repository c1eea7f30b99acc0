"""
Lambda handler uploading a landing page image.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.factory import get_landing_service
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_owner_id, parse_json_body
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ImageUploadRequest, ImageUploadResponse
from .service import ImageUploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle landing image upload requests.

    The returned image_url and image_key are meant to be sent back in a
    subsequent landing upsert.

    Expected body:
    {
        "file": "<base64>",
        "file_name": "hero.png",
        "content_type": "image/png"   # optional
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the image URL and key
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received landing image upload request",
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

    is_valid, result = validate_request(ImageUploadRequest, body, request_id=request_id)
    if not is_valid:
        return result

    service = ImageUploadService(get_landing_service())
    uploaded = service.upload(
        owner_id=owner_id,
        file_name=result.file_name,
        declared_content_type=result.content_type,
        file_data=result.decoded_file(),
    )

    response = ImageUploadResponse(
        image_url=uploaded.image_url,
        image_key=uploaded.image_key,
        message="Image uploaded successfully",
    )
    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
