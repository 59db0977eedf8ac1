"""Request models shared by the property image handlers."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from core.utils.constants import PROPERTY_ID_MAX_LENGTH, PROPERTY_ID_PATTERN
from core.utils.validators import decode_base64_file


class PropertyPathParams(BaseModel):
    """``{property_id}`` path parameter."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    property_id: str = Field(
        ...,
        min_length=1,
        max_length=PROPERTY_ID_MAX_LENGTH,
        pattern=PROPERTY_ID_PATTERN,
        description="Property identifier (alphanumeric, underscore, hyphen)",
    )


class ImagePathParams(PropertyPathParams):
    """``{property_id}`` and ``{image_id}`` path parameters."""

    image_id: str = Field(..., min_length=1, max_length=200, description="Image identifier")


def _decode_file_field(value: Any) -> Any:
    if value is None or isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ValueError("file must be a base64 encoded string")
    return decode_base64_file(value)


Base64File = Annotated[bytes, BeforeValidator(_decode_file_field)]
"""Raw file bytes received as a base64 string (``data:`` URLs accepted)."""
