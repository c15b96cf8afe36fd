"""Public interface for the Radarr/Sonarr adapters."""

from __future__ import annotations

from .client import RadarrClient, ServarrAPIError, SonarrClient
from .schema import RadarrMovie, SonarrSeason, SonarrSeries, SonarrStatistics
from .translator import to_fulfilled_movie, to_fulfilled_series, to_fulfillment_server

__all__ = [
    "RadarrClient",
    "RadarrMovie",
    "ServarrAPIError",
    "SonarrClient",
    "SonarrSeason",
    "SonarrSeries",
    "SonarrStatistics",
    "to_fulfilled_movie",
    "to_fulfilled_series",
    "to_fulfillment_server",
]
