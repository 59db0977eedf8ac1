"""
Lambda handler that merges image records from an uploaded JSON document.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ImageServiceError
from core.services.image_store import ImageStoreService
from core.utils.decorators import api_gateway_handler, domain_error_response, log_request
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)

from .models import ImportImagesRequest, ImportImagesResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Import records; existing ``(id, propertyId)`` pairs are skipped, not overwritten."""
    log_request("Received image import request", event, context)

    request_id = getattr(context, "aws_request_id", None)

    try:
        request = validate_request(ImportImagesRequest, parse_json_body(event))
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors(include_input=False)})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )
    except ValueError as exc:
        return ResponseBuilder.bad_request(str(exc), request_id=request_id)

    try:
        result = ImageStoreService().import_images(request.file)
    except ImageServiceError as exc:
        logger.warning("Image import failed", extra={"error_code": exc.error_code})
        return domain_error_response(exc, request_id=request_id)

    response = ImportImagesResponse(
        imported=result["imported"],
        skipped=result["skipped"],
        message="Images imported successfully",
    )
    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
