"""
Common decorators for API Gateway Lambda handlers and service operations.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any, TypeVar, cast

from aws_lambda_powertools import Logger

from core.models.errors import (
    ImageServiceError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from core.utils.constants import ERROR_CODE_INTERNAL_ERROR
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]
F = TypeVar("F", bound=Callable[..., Any])


def _get_user_friendly_message(exc: Exception) -> str:
    """
    Convert technical exception messages into user-friendly ones.

    Preserves specific validation messages while making generic errors friendly.
    """
    exc_str = str(exc)

    # If the exception message is already user-friendly (starts with common phrases),
    # keep it as is
    friendly_prefixes = (
        "Invalid",
        "Missing",
        "Required",
        "Must",
        "Cannot",
        "Unable to",
        "Failed to",
        "Image",
        "File",
        "Property",
    )

    if exc_str and any(exc_str.startswith(prefix) for prefix in friendly_prefixes):
        return exc_str

    # Default friendly messages by exception type
    if isinstance(exc, (UnicodeDecodeError, UnicodeEncodeError)):
        return "The file contains invalid characters or encoding. Please check the file format."

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    if isinstance(exc, TypeError):
        return "The data format is incorrect. Please check the request format."

    # For other exceptions with no context, use generic message
    return "We encountered an issue processing your request. Please try again."


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        # logger.exception automatically includes traceback
        logger.exception(message, extra=log_extra)
    else:
        # For warnings, manually add traceback
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def domain_error_response(
    exc: ImageServiceError,
    *,
    request_id: str | None = None,
    cors_origin: str | None = None,
) -> JsonDict:
    """Translate a domain error into its HTTP response.

    Only the error's public message is returned; ``details`` stay in the logs.
    """
    if isinstance(exc, ValidationError):
        return ResponseBuilder.validation_error(
            error=exc.error_code,
            message=exc.message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    if isinstance(exc, NotFoundError):
        return ResponseBuilder.error(
            status=HTTPStatus.NOT_FOUND,
            error=exc.error_code,
            message=exc.message,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    return ResponseBuilder.error(
        status=HTTPStatus.INTERNAL_SERVER_ERROR,
        error=exc.error_code,
        message=exc.message,
        request_id=request_id,
        cors_origin=cors_origin,
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Centralized exception handling and error responses
    - Request ID tracking and structured logging
    - User-friendly error messages

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"images": []})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        # Handle CORS preflight requests
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        # Domain errors that escaped the handler body
        except ImageServiceError as exc:
            _log_error(
                "Domain error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception" if isinstance(exc, StorageError) else "warning",
            )
            return domain_error_response(
                exc, request_id=request_id, cors_origin=cors_origin
            )

        # Client errors (4xx) - Bad Request
        except (
            ValueError,           # Invalid values, validation errors
            KeyError,             # Missing required fields in dicts
            TypeError,            # Wrong data types
            AttributeError,       # Missing attributes on objects
        ) as exc:
            _log_error(
                "Validation error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                _get_user_friendly_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Client errors (4xx) - Payload Too Large
        except MemoryError as exc:
            _log_error(
                "Memory error - payload too large",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.error(
                message="The file is too large to process. Maximum size is 10MB.",
                status=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Server errors (5xx) - Filesystem issues
        except OSError as exc:
            _log_error(
                "Filesystem error",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.error(
                message="Unable to access image storage. Please try again later.",
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        # Catch-all for unexpected errors
        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                "We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper


def operation_boundary(failure_message: str) -> Callable[[F], F]:
    """
    Normalize failures of a service operation into the domain taxonomy.

    ValidationError, NotFoundError and StorageError pass through unchanged.
    Anything else is logged and re-raised as StorageError with
    ``failure_message`` as the public message and the original exception
    text kept in ``details["reason"]``.

    Example:
        @operation_boundary("Unable to delete image")
        def delete_image(self, property_id, image_id): ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except ImageServiceError:
                raise
            except Exception as exc:
                logger.exception(
                    "Unexpected failure in image store operation",
                    extra={
                        "operation": func.__name__,
                        "error": str(exc),
                        "error_type": type(exc).__name__,
                    },
                )
                raise StorageError(
                    message=failure_message,
                    error_code=ERROR_CODE_INTERNAL_ERROR,
                    details={"reason": str(exc), "operation": func.__name__},
                ) from exc

        return cast(F, wrapper)

    return decorator


def log_request(message: str, event: dict[str, Any], context: Any) -> None:
    """Log an incoming API Gateway request with its routing context."""
    logger.info(
        message,
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "path_params": event.get("pathParameters"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
            "remaining_time_ms": context.get_remaining_time_in_millis()
            if hasattr(context, "get_remaining_time_in_millis")
            else None,
        },
    )
