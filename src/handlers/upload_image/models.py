"""Pydantic models for image upload request/response."""

from typing import Any

from pydantic import BaseModel, Field

from core.models.requests import Base64File, PropertyPathParams
from core.utils.constants import MAX_DESCRIPTION_LENGTH


class ImageUploadRequest(PropertyPathParams):
    """Validation model for a single image upload.

    ``file`` may be omitted; the service then reports that no image was
    uploaded. Size and MIME type are checked by the service as well, so the
    model only guarantees the payload is decodable.
    """

    file: Base64File | None = Field(None, description="Base64 encoded image file")
    file_name: str = Field(
        "", max_length=255, description="Client-side file name, used for the extension"
    )
    description: str | None = Field(
        None, max_length=MAX_DESCRIPTION_LENGTH, description="Image description"
    )
    image_type: str | None = Field(
        None, alias="type", max_length=50, description="Image category"
    )


class ImageResponse(BaseModel):
    """Response model carrying one image record."""

    image: dict[str, Any] = Field(..., description="Stored image record")
    message: str = Field(..., description="Success message")
