"""Domain port definitions for adapters."""

from __future__ import annotations

from .errors import TransientAdapterError
from .fulfillment import (
    FulfilledMovie,
    FulfilledSeries,
    FulfillmentServer,
    MovieFulfillmentClient,
    SeasonStatistics,
    SeriesFulfillmentClient,
)
from .media_server import MediaServerClient, MediaServerItem
from .persistence import MediaRepository, RequestRepository
from .unit_of_work import (
    AvailabilityRepositories,
    AvailabilityUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "AvailabilityRepositories",
    "AvailabilityUnitOfWork",
    "FulfilledMovie",
    "FulfilledSeries",
    "FulfillmentServer",
    "MediaRepository",
    "MediaServerClient",
    "MediaServerItem",
    "MovieFulfillmentClient",
    "RepositoryCollection",
    "RequestRepository",
    "SeasonStatistics",
    "SeriesFulfillmentClient",
    "TransientAdapterError",
    "UnitOfWork",
]
