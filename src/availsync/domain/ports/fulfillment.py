"""Ports for per-media-type fulfillment services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from availsync.domain.model import Variant


@dataclass(frozen=True, slots=True)
class FulfillmentServer:
    """Identity of one configured fulfillment service instance."""

    id: int
    name: str
    variant: Variant = Variant.STANDARD
    sync_enabled: bool = True


@dataclass(frozen=True, slots=True)
class FulfilledMovie:
    external_id: int
    has_file: bool


@dataclass(frozen=True, slots=True)
class SeasonStatistics:
    season_number: int
    episode_file_count: int = 0


@dataclass(frozen=True, slots=True)
class FulfilledSeries:
    external_id: int
    episode_file_count: int
    seasons: tuple[SeasonStatistics, ...] = ()

    def season(self, season_number: int) -> SeasonStatistics | None:
        for season in self.seasons:
            if season.season_number == season_number:
                return season
        return None


@runtime_checkable
class MovieFulfillmentClient(Protocol):
    @property
    def server(self) -> FulfillmentServer: ...

    def get_movie(self, external_id: int) -> FulfilledMovie | None: ...


@runtime_checkable
class SeriesFulfillmentClient(Protocol):
    @property
    def server(self) -> FulfillmentServer: ...

    def get_series(self, external_id: int) -> FulfilledSeries | None: ...
