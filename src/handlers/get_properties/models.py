"""Pydantic models for property listing reads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GetPropertiesRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    # Offer numbers are free-form in the properties document.
    property_id: str | None = Field(None, min_length=1, max_length=100)


class PropertiesResponse(BaseModel):
    properties: list[dict[str, Any]]
    count: int


class PropertyResponse(BaseModel):
    property: dict[str, Any]
