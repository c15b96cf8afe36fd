"""SQLAlchemy adapter package for availability persistence."""

from __future__ import annotations

from .mappings import (
    mapper_registry,
    media_request_table,
    media_table,
    season_table,
    start_mappers,
)
from .repositories import SqlAlchemyMediaRepository, SqlAlchemyRequestRepository
from .unit_of_work import (
    SqlAlchemyAvailabilityUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyAvailabilityUnitOfWork",
    "SqlAlchemyMediaRepository",
    "SqlAlchemyRequestRepository",
    "StartupError",
    "mapper_registry",
    "media_request_table",
    "media_table",
    "season_table",
    "shutdown",
    "start_mappers",
    "startup",
]
