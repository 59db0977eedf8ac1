"""Pydantic models for bulk image upload request/response."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.requests import Base64File, PropertyPathParams
from core.utils.constants import MAX_BULK_FILES


class BulkFile(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    file: Base64File = Field(..., description="Base64 encoded image file")
    file_name: str = Field("", max_length=255)


class BulkUploadRequest(PropertyPathParams):
    """Validation model for bulk uploads.

    ``descriptions`` and ``types`` are matched to ``files`` by position.
    The file count limit is enforced by the service so that an empty or
    oversized batch is reported as a domain validation error.
    """

    files: list[BulkFile] = Field(default_factory=list)
    descriptions: list[str | None] | None = None
    image_types: list[str | None] | None = Field(None, alias="types")

    @field_validator("descriptions", "image_types", mode="before")
    @classmethod
    def accept_single_value(cls, value: Any) -> Any:
        """A single string applies to the first file only."""
        if isinstance(value, str):
            return [value]
        return value


class BulkUploadResponse(BaseModel):
    images: list[dict[str, Any]]
    count: int = Field(..., ge=0, le=MAX_BULK_FILES)
    message: str
