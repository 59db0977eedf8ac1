"""Pydantic models for image delete request/response."""

from pydantic import BaseModel, Field

from core.models.requests import ImagePathParams


class DeleteImageRequest(ImagePathParams):
    """Validation model for image deletion request."""


class DeleteImageResponse(BaseModel):
    """Response model for successful image deletion."""

    image_id: str = Field(..., description="Deleted image ID")
    property_id: str = Field(..., description="Owning property ID")
    message: str = Field(..., description="Success message")
