"""Shared image record models.

Records are persisted and returned with camelCase keys; attributes are
snake_case. Unknown keys are kept so that imported documents survive a
round-trip through the store.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from core.utils.constants import COLLECTION_KEY, DEFAULT_IMAGE_TYPE
from core.utils.time import utc_now_iso


class ImageRecordMetadata(BaseModel):
    """File details for uploaded images, or the source marker for linked ones."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    filename: StrictStr | None = Field(None, description="Stored file name")
    original_name: StrictStr | None = Field(
        None, alias="originalName", description="File name supplied by the client"
    )
    size: StrictInt | None = Field(None, description="File size in bytes")
    mimetype: StrictStr | None = Field(None, description="Detected MIME type")
    source: StrictStr | None = Field(None, description="'url' for linked images")


class ImageRecord(BaseModel):
    """One stored or linked image belonging to a property."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: StrictStr = Field(..., min_length=1, description="Unique image identifier")
    property_id: StrictStr = Field(
        ..., alias="propertyId", min_length=1, description="Owning property identifier"
    )
    url: StrictStr = Field(..., description="Full-resolution asset URL")
    thumbnail_url: StrictStr | None = Field(
        None, alias="thumbnailUrl", description="Preview asset URL"
    )
    description: StrictStr = Field("", description="Free text description")
    type: StrictStr = Field(DEFAULT_IMAGE_TYPE, description="Image category")
    order: StrictInt = Field(0, description="Display position within the property")
    timestamp: StrictStr = Field(
        default_factory=utc_now_iso, description="ISO-8601 creation/update timestamp"
    )
    metadata: ImageRecordMetadata | None = None

    @property
    def stored_filename(self) -> str | None:
        """File name of the uploaded original, if this record owns one."""
        if self.metadata is None:
            return None
        return self.metadata.filename

    def to_document(self) -> dict[str, Any]:
        """Serialize using the persisted camelCase layout."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ImageCollection(BaseModel):
    """The whole persisted image document."""

    model_config = ConfigDict(populate_by_name=True)

    property_images: list[ImageRecord] = Field(
        default_factory=list, alias=COLLECTION_KEY
    )

    def for_property(self, property_id: str) -> list[ImageRecord]:
        return [img for img in self.property_images if img.property_id == property_id]

    def find(self, property_id: str, image_id: str) -> ImageRecord | None:
        for img in self.property_images:
            if img.id == image_id and img.property_id == property_id:
                return img
        return None

    def to_document(self) -> dict[str, Any]:
        return {COLLECTION_KEY: [img.to_document() for img in self.property_images]}
