"""Plex response schemas for metadata lookups."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PlexBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PlexMetadata(PlexBaseModel):
    rating_key: str = Field(alias="ratingKey")
    title: str | None = None
    index: int | None = None


class PlexMediaContainer(PlexBaseModel):
    metadata: list[PlexMetadata] = Field(default_factory=list["PlexMetadata"], alias="Metadata")


class PlexResponse(PlexBaseModel):
    media_container: PlexMediaContainer = Field(alias="MediaContainer")
