"""
Lambda handler responsible for listing images, for every property or one.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import ImageServiceError
from core.services.image_store import ImageStoreService
from core.utils.decorators import api_gateway_handler, domain_error_response, log_request
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import ListImagesRequest, ListImagesResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list images.

    Serves both ``GET /images`` and ``GET /images/property/{property_id}``.
    Records are returned in storage order.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    log_request("Received image list request", event, context)

    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            ListImagesRequest,
            {"property_id": path_params.get("property_id")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False)},
        )
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    service = ImageStoreService()

    try:
        if request.property_id:
            records = service.list_property_images(request.property_id)
        else:
            records = service.list_images()
    except ImageServiceError as exc:
        logger.exception("Error listing images", extra={"property_id": request.property_id})
        return domain_error_response(exc, request_id=request_id)

    response = ListImagesResponse(
        images=[record.to_document() for record in records],
        count=len(records),
        property_id=request.property_id,
    )

    return ResponseBuilder.ok(response.model_dump(exclude_none=True), request_id=request_id)
