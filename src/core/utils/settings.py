"""Storage configuration resolved from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_THUMBNAIL_SIZE,
    DEFAULT_UPLOADS_DIR,
    DEFAULT_UPLOADS_URL_PREFIX,
    ENV_IMAGE_COLLECTION_FILE,
    ENV_IMAGE_DATA_DIR,
    ENV_PROPERTIES_FILE,
    ENV_THUMBNAIL_MODE,
    ENV_THUMBNAIL_SIZE,
    ENV_UPLOADS_DIR,
    ENV_UPLOADS_URL_PREFIX,
    ENV_VALIDATE_PROPERTY_IDS,
    IMAGES_DOCUMENT_NAME,
    PROPERTIES_DIR_NAME,
    PROPERTIES_DOCUMENT_NAME,
    TEMP_DIR_NAME,
    THUMBNAIL_MODE_COPY,
    THUMBNAIL_MODE_RESIZE,
)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class StoreSettings(BaseModel):
    """Filesystem locations and behaviour switches for the image store."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(..., description="Directory holding the JSON documents")
    images_file: Path = Field(..., description="Image collection document")
    properties_file: Path = Field(..., description="Properties document")
    uploads_dir: Path = Field(..., description="Root of the upload tree")
    uploads_url_prefix: str = Field(DEFAULT_UPLOADS_URL_PREFIX)
    thumbnail_mode: str = Field(THUMBNAIL_MODE_COPY)
    thumbnail_size: tuple[int, int] = Field((320, 240))
    validate_property_ids: bool = Field(False)

    @field_validator("thumbnail_mode")
    @classmethod
    def validate_thumbnail_mode(cls, value: str) -> str:
        mode = value.strip().lower()
        if mode not in (THUMBNAIL_MODE_COPY, THUMBNAIL_MODE_RESIZE):
            raise ValueError(
                f"Invalid thumbnail mode '{value}'. "
                f"Expected '{THUMBNAIL_MODE_COPY}' or '{THUMBNAIL_MODE_RESIZE}'"
            )
        return mode

    @field_validator("thumbnail_size", mode="before")
    @classmethod
    def parse_thumbnail_size(cls, value: object) -> object:
        """Accept ``"320x240"`` strings as well as tuples."""
        if isinstance(value, str):
            width, _, height = value.lower().partition("x")
            try:
                return int(width), int(height)
            except ValueError as exc:
                raise ValueError(
                    f"Invalid thumbnail size '{value}'. Expected WIDTHxHEIGHT"
                ) from exc
        return value

    @field_validator("uploads_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def temp_dir(self) -> Path:
        return self.uploads_dir / TEMP_DIR_NAME

    @property
    def properties_upload_dir(self) -> Path:
        return self.uploads_dir / PROPERTIES_DIR_NAME

    @classmethod
    def from_env(cls) -> "StoreSettings":
        """Build settings from the process environment."""
        data_dir = Path(os.getenv(ENV_IMAGE_DATA_DIR) or DEFAULT_DATA_DIR)

        return cls(
            data_dir=data_dir,
            images_file=Path(
                os.getenv(ENV_IMAGE_COLLECTION_FILE) or data_dir / IMAGES_DOCUMENT_NAME
            ),
            properties_file=Path(
                os.getenv(ENV_PROPERTIES_FILE) or data_dir / PROPERTIES_DOCUMENT_NAME
            ),
            uploads_dir=Path(os.getenv(ENV_UPLOADS_DIR) or DEFAULT_UPLOADS_DIR),
            uploads_url_prefix=os.getenv(ENV_UPLOADS_URL_PREFIX)
            or DEFAULT_UPLOADS_URL_PREFIX,
            thumbnail_mode=os.getenv(ENV_THUMBNAIL_MODE) or THUMBNAIL_MODE_COPY,
            thumbnail_size=os.getenv(ENV_THUMBNAIL_SIZE) or DEFAULT_THUMBNAIL_SIZE,
            validate_property_ids=(
                (os.getenv(ENV_VALIDATE_PROPERTY_IDS) or "").strip().lower()
                in _TRUE_VALUES
            ),
        )
