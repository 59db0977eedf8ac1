"""
Lambda handler responsible for reordering the images of a property.
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

from .models import ReorderImagesRequest, ReorderImagesResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle reorder requests.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        200 with the property's images sorted by their new order
    """
    log_request("Received image reorder request", event, context)

    request_id = getattr(context, "aws_request_id", None)

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        return ResponseBuilder.bad_request(str(exc), request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            ReorderImagesRequest,
            {**body, "property_id": path_params.get("property_id")},
        )
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors(include_input=False)})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    try:
        records = ImageStoreService().reorder_images(
            request.property_id,
            order_map=request.order_map,
            image_ids=request.image_ids,
        )

    except (ValidationError, NotFoundError) as exc:
        logger.warning(
            "Reorder rejected",
            extra={"property_id": request.property_id, "error_code": exc.error_code},
        )
        return domain_error_response(exc, request_id=request_id)

    except StorageError as exc:
        logger.exception("Reorder failed", extra={"property_id": request.property_id})
        return domain_error_response(exc, request_id=request_id)

    response = ReorderImagesResponse(
        images=[record.to_document() for record in records],
        message="Images reordered successfully",
    )
    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
