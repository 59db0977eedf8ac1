"""
Lambda handler responsible for updating an image's description, order or type.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import NotFoundError, StorageError, ValidationError
from core.services.image_store import ImageStoreService
from core.utils.decorators import api_gateway_handler, domain_error_response, log_request
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)
from handlers.upload_image.models import ImageResponse

from .models import UpdateImageRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image update requests.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 with the updated record, 404 if the image does not exist
    """
    log_request("Received image update request", event, context)

    request_id = getattr(context, "aws_request_id", None)

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        return ResponseBuilder.bad_request(str(exc), request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            UpdateImageRequest,
            {
                **body,
                "property_id": path_params.get("property_id"),
                "image_id": path_params.get("image_id"),
            },
        )
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors(include_input=False)})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    try:
        record = ImageStoreService().update_image(
            request.property_id,
            request.image_id,
            description=request.description,
            order=request.order,
            image_type=request.image_type,
        )

    except NotFoundError as exc:
        logger.info(
            "Image not found during update",
            extra={"property_id": request.property_id, "image_id": request.image_id},
        )
        return domain_error_response(exc, request_id=request_id)

    except (ValidationError, StorageError) as exc:
        logger.exception("Image update failed", extra={"image_id": request.image_id})
        return domain_error_response(exc, request_id=request_id)

    response = ImageResponse(image=record.to_document(), message="Image updated successfully")
    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
