"""Per-run state threaded through the resolvers."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .cache import LookupCache

if TYPE_CHECKING:
    from .probe import Probe


class CancellationToken:
    """Cooperative cancellation flag, polled between records."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(slots=True)
class SyncStats:
    processed: int = 0
    updated: int = 0
    failed: int = 0
    indeterminate_probes: int = 0


@dataclass(slots=True)
class SyncSession:
    """Everything that lives exactly as long as one run."""

    token: CancellationToken = field(default_factory=CancellationToken)
    cache: LookupCache = field(default_factory=LookupCache)
    stats: SyncStats = field(default_factory=SyncStats)

    def observe[T](self, result: Probe[T]) -> Probe[T]:
        if result.is_indeterminate:
            self.stats.indeterminate_probes += 1
        return result
