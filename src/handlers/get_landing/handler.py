"""
Lambda handler returning the authenticated owner's landing page.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.factory import get_landing_service
from core.utils.decorators import api_gateway_handler
from core.utils.events import get_owner_id
from core.utils.response import ResponseBuilder

from .models import LandingResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle landing page read requests.

    An owner without a stored page receives an empty page scoped to them,
    so clients always have something to render.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received landing get request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
        },
    )

    owner_id = get_owner_id(event)
    if owner_id is None:
        return ResponseBuilder.unauthorized(request_id=request_id)

    landing = get_landing_service().get(owner_id)

    return ResponseBuilder.ok(
        LandingResponse(landing=landing).model_dump(),
        request_id=request_id,
    )
