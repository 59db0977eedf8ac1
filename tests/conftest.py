"""
Pytest configuration and fixtures for property image store tests.
Every test gets its own data and upload directories under ``tmp_path``.
"""

import base64
import io
import json
import os
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest
from PIL import Image

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "PropertyImageStore")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "property-image-store")

from core.services.image_store import ImageStoreService  # noqa: E402
from core.utils.settings import StoreSettings  # noqa: E402


@pytest.fixture(autouse=True)
def store_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the store at a fresh temporary directory."""
    monkeypatch.setenv("IMAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("UPLOADS_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("UPLOADS_URL_PREFIX", "/uploads")

    for name in (
        "IMAGE_COLLECTION_FILE",
        "PROPERTIES_FILE",
        "THUMBNAIL_MODE",
        "THUMBNAIL_SIZE",
        "VALIDATE_PROPERTY_IDS",
    ):
        monkeypatch.delenv(name, raising=False)

    return tmp_path


@pytest.fixture
def settings() -> StoreSettings:
    return StoreSettings.from_env()


@pytest.fixture
def service(settings: StoreSettings) -> ImageStoreService:
    return ImageStoreService(settings)


@pytest.fixture
def images_file(settings: StoreSettings) -> Path:
    return settings.images_file


@pytest.fixture
def read_document(images_file: Path) -> Callable[[], dict[str, Any]]:
    """Read the persisted image document as raw JSON."""

    def _read() -> dict[str, Any]:
        data: dict[str, Any] = json.loads(images_file.read_text(encoding="utf-8"))
        return data

    return _read


@pytest.fixture
def write_document(images_file: Path) -> Callable[[list[dict[str, Any]]], None]:
    """Replace the image document with the given records."""

    def _write(records: list[dict[str, Any]]) -> None:
        images_file.parent.mkdir(parents=True, exist_ok=True)
        images_file.write_text(json.dumps({"property_images": records}), encoding="utf-8")

    return _write


@pytest.fixture
def write_properties(settings: StoreSettings) -> Callable[[Any], Path]:
    def _write(document: Any) -> Path:
        settings.properties_file.parent.mkdir(parents=True, exist_ok=True)
        settings.properties_file.write_text(json.dumps(document), encoding="utf-8")
        return settings.properties_file

    return _write


def _encode_image(image_format: str, size: tuple[int, int]) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 120, 40)).save(buffer, image_format)
    return buffer.getvalue()


@pytest.fixture
def sample_png_bytes() -> bytes:
    """A decodable 640x480 PNG."""
    return _encode_image("PNG", (640, 480))


@pytest.fixture
def sample_jpeg_bytes() -> bytes:
    """A decodable 800x600 JPEG."""
    return _encode_image("JPEG", (800, 600))


@pytest.fixture
def sample_gif_bytes() -> bytes:
    return _encode_image("GIF", (10, 10))


@pytest.fixture
def b64() -> Callable[[bytes], str]:
    def _encode(data: bytes) -> str:
        return base64.b64encode(data).decode("utf-8")

    return _encode


@pytest.fixture
def sample_record() -> Callable[..., dict[str, Any]]:
    """Build a persisted-layout image record."""

    def _record(image_id: str, property_id: str = "P1", **overrides: Any) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": image_id,
            "propertyId": property_id,
            "url": f"https://cdn.example.com/{image_id}.jpg",
            "thumbnailUrl": f"https://cdn.example.com/{image_id}.jpg",
            "description": "",
            "type": "exterior",
            "order": 1,
            "timestamp": "2024-01-01T10:00:00+00:00",
            "metadata": {"source": "url"},
        }
        record.update(overrides)
        return record

    return _record


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event.

    Usage:
        event = make_event("POST", "/images/property/{property_id}/url",
                           path_params={"property_id": "P1"},
                           body={"url": "https://x/y.jpg"})
    """

    def _event(
        method: str,
        resource: str,
        *,
        path_params: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        body: Any = None,
    ) -> dict[str, Any]:
        path = resource
        for key, value in (path_params or {}).items():
            path = path.replace("{" + key + "}", value)

        return {
            "httpMethod": method,
            "resource": resource,
            "path": path,
            "pathParameters": path_params,
            "queryStringParameters": query,
            "headers": {"Content-Type": "application/json"},
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
            "isBase64Encoded": False,
        }

    return _event


@pytest.fixture
def parse_body() -> Callable[[dict[str, Any]], Any]:
    def _parse(response: dict[str, Any]) -> Any:
        body = response.get("body")
        if not body:
            return {}
        return json.loads(body)

    return _parse
