"""
Lambda handler serving the read-only property listings.
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

from .models import GetPropertiesRequest, PropertiesResponse, PropertyResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Serve ``GET /properties`` and ``GET /properties/{property_id}``."""
    log_request("Received property request", event, context)

    request_id = getattr(context, "aws_request_id", None)
    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            GetPropertiesRequest,
            {"property_id": path_params.get("property_id")},
        )
    except ValidationError as exc:
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    service = ImageStoreService()

    try:
        if request.property_id is None:
            properties = service.list_properties()
            body = PropertiesResponse(properties=properties, count=len(properties))
        else:
            body = PropertyResponse(property=service.get_property(request.property_id))
    except ImageServiceError as exc:
        logger.warning(
            "Property lookup failed",
            extra={"property_id": request.property_id, "error_code": exc.error_code},
        )
        return domain_error_response(exc, request_id=request_id)

    return ResponseBuilder.ok(body.model_dump(), request_id=request_id)
