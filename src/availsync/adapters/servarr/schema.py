"""Radarr/Sonarr v3 response schemas (only the fields availability needs)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServarrBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RadarrMovie(ServarrBaseModel):
    id: int
    has_file: bool = Field(default=False, alias="hasFile")


class SonarrStatistics(ServarrBaseModel):
    episode_file_count: int = Field(default=0, alias="episodeFileCount")


class SonarrSeason(ServarrBaseModel):
    season_number: int = Field(alias="seasonNumber")
    statistics: SonarrStatistics | None = None


class SonarrSeries(ServarrBaseModel):
    id: int
    statistics: SonarrStatistics | None = None
    seasons: list[SonarrSeason] = Field(default_factory=list["SonarrSeason"])
