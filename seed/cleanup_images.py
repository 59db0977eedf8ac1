#!/usr/bin/env python3
"""
Cleanup script that deletes every image of one property.

Run:
    python seed/cleanup_images.py \
      --api-url http://localhost:3000 \
      --property-id P1
"""

import argparse
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="cleanup")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete all images of a property")

    parser.add_argument("--api-url", required=True, help="Base URL of the API")
    parser.add_argument(
        "--property-id",
        required=True,
        help="Property whose images should be deleted",
    )
    parser.add_argument("--api-key", default=None, help="Value for the x-api-key header")

    return parser.parse_args()


def cleanup_images() -> None:
    try:
        args = parse_args()

        headers: dict[str, str] = {}
        if args.api_key:
            headers["x-api-key"] = args.api_key

        property_url = f"{args.api_url.rstrip('/')}/images/property/{args.property_id}"

        logger.info(
            "Starting cleanup process",
            extra={"url": property_url, "property_id": args.property_id},
        )

        response = requests.get(property_url, headers=headers, timeout=30)

        if not response.ok:
            logger.error(
                "Failed to list images",
                extra={"status": response.status_code, "response": response.text},
            )
            sys.exit(1)

        images = cast(list[dict[str, Any]], response.json().get("images", []))

        if not images:
            logger.info("No images found for cleanup")
            return

        failures = 0
        for image in images:
            image_id = image["id"]

            delete_resp = requests.delete(
                f"{property_url}/image/{image_id}",
                headers=headers,
                timeout=30,
            )

            if delete_resp.ok:
                logger.info("Deleted image", extra={"image_id": image_id})
            else:
                failures += 1
                logger.error(
                    "Failed to delete image",
                    extra={
                        "image_id": image_id,
                        "status": delete_resp.status_code,
                        "response": delete_resp.text,
                    },
                )

        logger.info(
            "Cleanup completed",
            extra={"deleted": len(images) - failures, "failed": failures},
        )

    except Exception as exc:
        logger.exception("Cleanup failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    cleanup_images()
