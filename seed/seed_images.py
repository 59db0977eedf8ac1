#!/usr/bin/env python3
"""
Seed script that uploads a directory of images to one property.

Run:
    python seed/seed_images.py \
      --api-url http://localhost:3000 \
      --property-id P1 \
      --images-dir ./photos
"""

import argparse
import base64
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")

IMAGE_SUFFIXES = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
MAX_FILES_PER_REQUEST = 20


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed property images via the image API")

    parser.add_argument("--api-url", required=True, help="Base URL of the API")
    parser.add_argument("--property-id", required=True, help="Property to attach images to")
    parser.add_argument(
        "--images-dir",
        type=Path,
        default=Path(__file__).parent / "images",
        help="Directory containing the images to upload",
    )
    parser.add_argument(
        "--type",
        dest="image_type",
        default=None,
        help="Image type applied to every upload (defaults to the server's)",
    )
    parser.add_argument("--api-key", default=None, help="Value for the x-api-key header")

    return parser.parse_args()


def collect_images(images_dir: Path) -> list[Path]:
    return sorted(
        path for path in images_dir.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    )


def build_payload(paths: list[Path], image_type: str | None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "files": [
            {
                "file": base64.b64encode(path.read_bytes()).decode("utf-8"),
                "file_name": path.name,
            }
            for path in paths
        ],
        "descriptions": [path.stem.replace("_", " ") for path in paths],
    }
    if image_type:
        payload["types"] = [image_type] * len(paths)
    return payload


def seed_images() -> None:
    try:
        args = parse_args()

        headers: dict[str, str] = {"Content-Type": "application/json"}
        if args.api_key:
            headers["x-api-key"] = args.api_key

        base_url = args.api_url.rstrip("/")
        bulk_url = f"{base_url}/images/property/{args.property_id}/bulk"

        paths = collect_images(args.images_dir)
        if not paths:
            logger.warning("No images found", extra={"images_dir": str(args.images_dir)})
            return

        logger.info(
            "Starting seeding process",
            extra={"url": bulk_url, "file_count": len(paths)},
        )

        for start in range(0, len(paths), MAX_FILES_PER_REQUEST):
            batch = paths[start : start + MAX_FILES_PER_REQUEST]

            response = requests.post(
                bulk_url,
                headers=headers,
                json=build_payload(batch, args.image_type),
                timeout=60,
            )
            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 201:
                logger.info(
                    "Seeded batch",
                    extra={
                        "files": [path.name for path in batch],
                        "image_ids": [img.get("id") for img in response_json.get("images", [])],
                    },
                )
            else:
                logger.error(
                    "Failed to seed batch",
                    extra={
                        "files": [path.name for path in batch],
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        list_response = requests.get(
            f"{base_url}/images/property/{args.property_id}",
            headers=headers,
            timeout=30,
        )

        logger.info(
            "Seeding completed",
            extra={
                "status": list_response.status_code,
                "count": list_response.json().get("count") if list_response.ok else None,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_images()
