"""Pydantic models for JSON import request/response."""

from pydantic import BaseModel, Field

from core.models.requests import Base64File


class ImportImagesRequest(BaseModel):
    file: Base64File | None = Field(
        None, description="Base64 encoded JSON document with a property_images list"
    )


class ImportImagesResponse(BaseModel):
    imported: int = Field(..., ge=0, description="Records added to the store")
    skipped: int = Field(..., ge=0, description="Records already present, left untouched")
    message: str
