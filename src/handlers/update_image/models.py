"""Request model for partial image updates."""

from pydantic import Field, StrictInt

from core.models.requests import ImagePathParams
from core.utils.constants import MAX_DESCRIPTION_LENGTH


class UpdateImageRequest(ImagePathParams):
    """Only fields present in the body are applied."""

    description: str | None = Field(None, max_length=MAX_DESCRIPTION_LENGTH)
    order: StrictInt | None = Field(None, description="New display position")
    image_type: str | None = Field(None, alias="type", max_length=50)
