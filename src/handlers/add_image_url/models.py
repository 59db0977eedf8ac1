"""Request model for linking an external image to a property."""

from pydantic import Field

from core.models.requests import PropertyPathParams
from core.utils.constants import MAX_DESCRIPTION_LENGTH


class AddImageUrlRequest(PropertyPathParams):
    url: str | None = Field(None, max_length=2048, description="External image URL")
    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    image_type: str | None = Field(None, alias="type", max_length=50)
