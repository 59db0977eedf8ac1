"""
Lambda handler that adds an image by URL instead of by upload.
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
from handlers.upload_image.models import ImageResponse

from .models import AddImageUrlRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Create an image record pointing at an external URL.

    The URL is used for both ``url`` and ``thumbnailUrl``.
    """
    log_request("Received add image URL request", event, context)

    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        body = parse_json_body(event)
        request = validate_request(
            AddImageUrlRequest,
            {**body, "property_id": path_params.get("property_id")},
        )
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
        record = ImageStoreService().add_image_url(
            request.property_id,
            url=request.url,
            description=request.description,
            image_type=request.image_type,
        )
    except ImageServiceError as exc:
        logger.warning(
            "Add image URL failed",
            extra={"property_id": request.property_id, "error_code": exc.error_code},
        )
        return domain_error_response(exc, request_id=request_id)

    response = ImageResponse(image=record.to_document(), message="Image URL added successfully")
    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
