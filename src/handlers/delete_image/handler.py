"""
Lambda handler responsible for deleting a property image.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import NotFoundError, StorageError, ValidationError
from core.services.image_store import ImageStoreService
from core.utils.decorators import api_gateway_handler, domain_error_response, log_request
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest, DeleteImageResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image deletion requests.

    This function:
    - Extracts the property and image identifiers from path parameters
    - Delegates deletion of the record and its files to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    log_request("Received image delete request", event, context)

    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteImageRequest,
            {
                "property_id": path_params.get("property_id"),
                "image_id": path_params.get("image_id"),
            },
        )
    except PydanticValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors(include_input=False)},
        )
        return ResponseBuilder.bad_request(
            "Invalid request payload",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    try:
        ImageStoreService().delete_image(request.property_id, request.image_id)

    except NotFoundError as exc:
        logger.info(
            "Image not found during delete",
            extra={"property_id": request.property_id, "image_id": request.image_id},
        )
        return domain_error_response(exc, request_id=request_id)

    except (ValidationError, StorageError) as exc:
        logger.exception(
            "Deletion failed",
            extra={"image_id": request.image_id},
        )
        return domain_error_response(exc, request_id=request_id)

    response = DeleteImageResponse(
        image_id=request.image_id,
        property_id=request.property_id,
        message="Image deleted successfully",
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
