"""Ports for reading and writing persisted availability state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from availsync.domain.model import MediaRecord, Variant


@runtime_checkable
class MediaRepository(Protocol):
    """Persistence contract for media records."""

    def load_eligible_page(self, *, offset: int, limit: int) -> Sequence[MediaRecord]:
        """Return records with at least one variant AVAILABLE or PARTIALLY_AVAILABLE."""
        ...

    def save(self, record: MediaRecord) -> None: ...


@runtime_checkable
class RequestRepository(Protocol):
    """Read-only view of acquisition requests."""

    def has_approved_unfulfilled_request(self, *, media_id: int, variant: Variant) -> bool: ...
