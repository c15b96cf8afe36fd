"""Availability reconciliation engine."""

from __future__ import annotations

from .cache import LookupCache
from .movies import MovieExistenceResolver
from .orchestrator import (
    DEFAULT_PAGE_SIZE,
    AvailabilitySync,
    RunOutcome,
    SyncAlreadyRunningError,
    SyncResult,
)
from .probe import Probe, ProbeOutcome, probe
from .series import SeriesExistenceResolver
from .session import CancellationToken, SyncSession, SyncStats
from .transitions import (
    LinkageChange,
    StateTransitionEngine,
    VariantTransition,
    plan_parent_after_season_loss,
    plan_season,
    plan_variant,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "AvailabilitySync",
    "CancellationToken",
    "LinkageChange",
    "LookupCache",
    "MovieExistenceResolver",
    "Probe",
    "ProbeOutcome",
    "RunOutcome",
    "SeriesExistenceResolver",
    "StateTransitionEngine",
    "SyncAlreadyRunningError",
    "SyncResult",
    "SyncSession",
    "SyncStats",
    "VariantTransition",
    "plan_parent_after_season_loss",
    "plan_season",
    "plan_variant",
    "probe",
]
