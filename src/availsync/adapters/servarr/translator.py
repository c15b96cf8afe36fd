"""Translate Radarr/Sonarr payloads into fulfillment port values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from availsync.domain.model import Variant
from availsync.domain.ports import (
    FulfilledMovie,
    FulfilledSeries,
    FulfillmentServer,
    SeasonStatistics,
)

if TYPE_CHECKING:
    from availsync.config.fulfillment import FulfillmentServerConfig

    from .schema import RadarrMovie, SonarrSeries


def to_fulfillment_server(config: FulfillmentServerConfig) -> FulfillmentServer:
    return FulfillmentServer(
        id=config.id,
        name=config.name,
        variant=Variant.from_is_4k(config.is_4k),
        sync_enabled=config.sync_enabled,
    )


def to_fulfilled_movie(movie: RadarrMovie) -> FulfilledMovie:
    return FulfilledMovie(external_id=movie.id, has_file=movie.has_file)


def to_fulfilled_series(series: SonarrSeries) -> FulfilledSeries:
    # Sonarr omits statistics for series it has never scanned.
    total = series.statistics.episode_file_count if series.statistics else 0
    return FulfilledSeries(
        external_id=series.id,
        episode_file_count=total,
        seasons=tuple(
            SeasonStatistics(
                season_number=season.season_number,
                episode_file_count=(
                    season.statistics.episode_file_count if season.statistics else 0
                ),
            )
            for season in series.seasons
        ),
    )
