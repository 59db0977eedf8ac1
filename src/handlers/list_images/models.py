"""Pydantic models for image listing request/response."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core.utils.constants import PROPERTY_ID_MAX_LENGTH, PROPERTY_ID_PATTERN


class ListImagesRequest(BaseModel):
    """Optional ``{property_id}`` path parameter; absent means all images."""

    model_config = ConfigDict(str_strip_whitespace=True)

    property_id: str | None = Field(
        None,
        min_length=1,
        max_length=PROPERTY_ID_MAX_LENGTH,
        pattern=PROPERTY_ID_PATTERN,
    )


class ListImagesResponse(BaseModel):
    images: list[dict[str, Any]] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Number of images returned")
    property_id: str | None = None
