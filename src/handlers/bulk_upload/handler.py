"""
Lambda handler responsible for uploading several images to one property.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import NotFoundError, StorageError, ValidationError
from core.services.image_store import ImageStoreService, UploadedFile
from core.utils.decorators import api_gateway_handler, domain_error_response, log_request
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)

from .models import BulkUploadRequest, BulkUploadResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle bulk upload requests.

    Expected body:
    {
        "files": [{"file": "<base64>", "file_name": "a.jpg"}, ...],
        "descriptions": ["Front", "Garden"],
        "types": ["exterior", "garden"]
    }

    Every file is validated before any is stored; the image document is
    written once for the whole batch.
    """
    log_request("Received bulk upload request", event, context)

    request_id = getattr(context, "aws_request_id", None)

    try:
        body = parse_json_body(event)
    except ValueError as exc:
        logger.warning("Invalid JSON body received", extra={"error": str(exc)})
        return ResponseBuilder.bad_request(str(exc), request_id=request_id)

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            BulkUploadRequest,
            {**body, "property_id": path_params.get("property_id")},
        )
    except PydanticValidationError as exc:
        logger.error("Request validation failed", extra={"errors": exc.errors(include_input=False)})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": sanitize_validation_errors(exc.errors())},
            request_id=request_id,
        )

    uploads = [UploadedFile(file_name=item.file_name, data=item.file) for item in request.files]

    try:
        records = ImageStoreService().bulk_upload(
            request.property_id,
            uploads=uploads,
            descriptions=request.descriptions,
            image_types=request.image_types,
        )

    except (ValidationError, NotFoundError) as exc:
        logger.warning(
            "Bulk upload rejected",
            extra={
                "property_id": request.property_id,
                "file_count": len(uploads),
                "error_code": exc.error_code,
            },
        )
        return domain_error_response(exc, request_id=request_id)

    except StorageError as exc:
        logger.exception(
            "Storage error during bulk upload",
            extra={"property_id": request.property_id, "file_count": len(uploads)},
        )
        return domain_error_response(exc, request_id=request_id)

    response = BulkUploadResponse(
        images=[record.to_document() for record in records],
        count=len(records),
        message=f"{len(records)} images uploaded successfully",
    )

    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
