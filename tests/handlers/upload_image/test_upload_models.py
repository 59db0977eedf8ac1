"""Unit tests for upload request validation."""

import base64

import pytest
from pydantic import ValidationError

from handlers.upload_image.models import ImageUploadRequest


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def valid_payload(**overrides):
    payload = {
        "property_id": "P1",
        "file": b64(b"test-image"),
        "file_name": "photo.jpg",
        "description": "Nice photo",
        "type": "interior",
    }
    payload.update(overrides)
    return payload


class TestUploadModels:
    def test_valid_request_decodes_file(self) -> None:
        req = ImageUploadRequest(**valid_payload())

        assert req.file == b"test-image"
        assert req.image_type == "interior"

    def test_file_is_optional(self) -> None:
        assert ImageUploadRequest(property_id="P1").file is None

    @pytest.mark.parametrize("property_id", ["user@123", "", "a/b", "x" * 101])
    def test_invalid_property_id(self, property_id: str) -> None:
        with pytest.raises(ValidationError):
            ImageUploadRequest(**valid_payload(property_id=property_id))

    @pytest.mark.parametrize("file", ["invalid!!", "", 123])
    def test_invalid_file(self, file) -> None:
        with pytest.raises(ValidationError):
            ImageUploadRequest(**valid_payload(file=file))

    def test_description_too_long(self) -> None:
        with pytest.raises(ValidationError):
            ImageUploadRequest(**valid_payload(description="x" * 1001))
