"""
Lambda handler responsible for uploading a single property image.
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

from .models import ImageResponse, ImageUploadRequest

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    Expected API Gateway event structure:
    {
        "pathParameters": {"property_id": "P1"},
        "body": "{\"file\": \"<base64>\", \"file_name\": \"front.jpg\", ...}"
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        201 with the created image record
    """
    log_request("Received image upload request", event, context)

    request_id = getattr(context, "aws_request_id", None)

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        logger.warning("Invalid JSON body received", extra={"error": str(exc)})
        return ResponseBuilder.bad_request(str(exc), request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            ImageUploadRequest,
            {**body, "property_id": path_params.get("property_id")},
        )
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False)},
        )
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    try:
        record = ImageStoreService().add_uploaded_image(
            request.property_id,
            file_data=request.file,
            file_name=request.file_name,
            description=request.description,
            image_type=request.image_type,
        )

    except (ValidationError, NotFoundError) as exc:
        logger.warning(
            "Image upload rejected",
            extra={"property_id": request.property_id, "error_code": exc.error_code},
        )
        return domain_error_response(exc, request_id=request_id)

    except StorageError as exc:
        logger.exception(
            "Storage error during image upload",
            extra={"property_id": request.property_id},
        )
        return domain_error_response(exc, request_id=request_id)

    response = ImageResponse(
        image=record.to_document(),
        message="Image uploaded successfully",
    )

    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
