"""Pydantic models for image reorder request/response."""

from typing import Any

from pydantic import BaseModel, Field

from core.models.requests import PropertyPathParams


class ReorderImagesRequest(PropertyPathParams):
    """Either ``orderMap`` (id -> order) or ``imageIds`` (ids in display order).

    Supplying both or neither is rejected by the service.
    """

    order_map: dict[str, int] | None = Field(None, alias="orderMap")
    image_ids: list[str] | None = Field(None, alias="imageIds")


class ReorderImagesResponse(BaseModel):
    images: list[dict[str, Any]] = Field(..., description="Property images sorted by order")
    message: str
