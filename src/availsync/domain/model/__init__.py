"""Domain model for availability reconciliation."""

from __future__ import annotations

from .enums import (
    PRESENT_STATUSES,
    TERMINAL_STATUSES,
    MediaStatus,
    MediaType,
    RequestStatus,
    Variant,
)
from .media import (
    MediaRecord,
    MediaRequest,
    RecordSnapshot,
    SeasonRecord,
    SeasonSnapshot,
    VariantState,
)

__all__ = [
    "PRESENT_STATUSES",
    "TERMINAL_STATUSES",
    "MediaRecord",
    "MediaRequest",
    "MediaStatus",
    "MediaType",
    "RecordSnapshot",
    "RequestStatus",
    "SeasonRecord",
    "SeasonSnapshot",
    "Variant",
    "VariantState",
]
