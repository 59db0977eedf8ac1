"""
Single entry point that routes API Gateway proxy events to the route handlers.

Deployments that map every route to one Lambda function point it at
``handlers.router.dispatch``; per-route deployments use the handlers directly.
"""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.utils.response import ResponseBuilder
from handlers.add_image_url.handler import handler as add_image_url
from handlers.bulk_upload.handler import handler as bulk_upload
from handlers.delete_image.handler import handler as delete_image
from handlers.export_images.handler import handler as export_images
from handlers.get_properties.handler import handler as get_properties
from handlers.import_images.handler import handler as import_images
from handlers.list_images.handler import handler as list_images
from handlers.reorder_images.handler import handler as reorder_images
from handlers.update_image.handler import handler as update_image
from handlers.upload_image.handler import handler as upload_image

logger = Logger(UTC=True)

Handler = Callable[[dict[str, Any], LambdaContext], dict[str, Any]]

ROUTES: dict[str, dict[str, Handler]] = {
    "/images": {"GET": list_images},
    "/images/import": {"POST": import_images},
    "/images/export": {"GET": export_images},
    "/images/property/{property_id}": {"GET": list_images},
    "/images/property/{property_id}/upload": {"POST": upload_image},
    "/images/property/{property_id}/url": {"POST": add_image_url},
    "/images/property/{property_id}/bulk": {"POST": bulk_upload},
    "/images/property/{property_id}/reorder": {"PUT": reorder_images},
    "/images/property/{property_id}/image/{image_id}": {
        "PUT": update_image,
        "DELETE": delete_image,
    },
    "/properties": {"GET": get_properties},
    "/properties/{property_id}": {"GET": get_properties},
}


def dispatch(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Route by API Gateway ``resource`` template and ``httpMethod``."""
    resource = event.get("resource") or ""
    method = (event.get("httpMethod") or "").upper()

    methods = ROUTES.get(resource)
    if methods is None:
        logger.warning("No route for resource", extra={"resource": resource, "http_method": method})
        return ResponseBuilder.not_found(f"No route for {method} {resource}".strip())

    if method == "OPTIONS":
        return ResponseBuilder.no_content()

    route = methods.get(method)
    if route is None:
        logger.warning("Method not allowed", extra={"resource": resource, "http_method": method})
        return ResponseBuilder.method_not_allowed()

    return route(event, context)
