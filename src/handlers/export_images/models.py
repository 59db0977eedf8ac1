"""Query model for JSON export."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from core.utils.constants import EXPORT_FILENAME, PROPERTY_ID_MAX_LENGTH, PROPERTY_ID_PATTERN


class ExportImagesRequest(BaseModel):
    """``?property_id=`` (or ``?propertyId=``) narrows the export to one property."""

    model_config = ConfigDict(str_strip_whitespace=True)

    property_id: str | None = Field(
        None,
        validation_alias=AliasChoices("property_id", "propertyId"),
        max_length=PROPERTY_ID_MAX_LENGTH,
        pattern=PROPERTY_ID_PATTERN,
    )

    @property
    def filename(self) -> str:
        if not self.property_id:
            return EXPORT_FILENAME
        stem, _, suffix = EXPORT_FILENAME.rpartition(".")
        return f"{stem}_{self.property_id}.{suffix}"
