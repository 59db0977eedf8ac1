"""
Lambda handler that returns the image document as a downloadable JSON file.
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

from .models import ExportImagesRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle export requests.

    The response body is the bare ``{"property_images": [...]}`` document so
    that a download can be fed back to the import endpoint unchanged.
    """
    log_request("Received image export request", event, context)

    request_id = getattr(context, "aws_request_id", None)
    params = event.get("queryStringParameters") or {}

    try:
        request = validate_request(ExportImagesRequest, params)
    except ValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors(include_input=False)})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    try:
        document = ImageStoreService().export_images(request.property_id)
    except ImageServiceError as exc:
        logger.exception("Error exporting images", extra={"property_id": request.property_id})
        return domain_error_response(exc, request_id=request_id)

    return ResponseBuilder.attachment(document, filename=request.filename)
