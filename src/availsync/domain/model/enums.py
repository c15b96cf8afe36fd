"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class MediaType(StrEnum):
    MOVIE = "movie"
    TV = "tv"


class MediaStatus(StrEnum):
    UNKNOWN = "unknown"
    PENDING = "pending"
    PROCESSING = "processing"
    PARTIALLY_AVAILABLE = "partially_available"
    AVAILABLE = "available"
    DELETED = "deleted"


class Variant(StrEnum):
    """Parallel fidelity tracks tracked per title."""

    STANDARD = "standard"
    ENHANCED = "enhanced"  # 4K

    @property
    def label(self) -> str:
        return "4k" if self is Variant.ENHANCED else "non-4k"

    @classmethod
    def from_is_4k(cls, is_4k: bool) -> Variant:  # noqa: FBT001
        return cls.ENHANCED if is_4k else cls.STANDARD


class RequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"
    FAILED = "failed"
    COMPLETED = "completed"


PRESENT_STATUSES: Final[frozenset[MediaStatus]] = frozenset(
    {MediaStatus.AVAILABLE, MediaStatus.PARTIALLY_AVAILABLE}
)
TERMINAL_STATUSES: Final[frozenset[MediaStatus]] = frozenset(
    {MediaStatus.DELETED, MediaStatus.UNKNOWN}
)
