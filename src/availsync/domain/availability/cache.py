"""Run-scoped memoisation of remote season listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from availsync.domain.ports import FulfilledSeries, MediaServerItem

    from .probe import Probe

type SeriesKey = tuple[int, int]
"""(fulfillment server id, external series id)"""


@dataclass(slots=True)
class LookupCache:
    """Memo table valid for a single run.

    Both successful and unsuccessful probes are stored, so every distinct key
    triggers at most one remote call per run.
    """

    _series: dict[SeriesKey, Probe[FulfilledSeries]] = field(
        default_factory=dict["SeriesKey", "Probe[FulfilledSeries]"]
    )
    _children: dict[str, Probe[Sequence[MediaServerItem]]] = field(
        default_factory=dict[str, "Probe[Sequence[MediaServerItem]]"]
    )
    misses: int = 0
    hits: int = 0

    def series(
        self,
        server_id: int,
        external_id: int,
        fetch: Callable[[], Probe[FulfilledSeries]],
    ) -> Probe[FulfilledSeries]:
        key = (server_id, external_id)
        cached = self._series.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        result = fetch()
        self._series[key] = result
        return result

    def children(
        self,
        rating_key: str,
        fetch: Callable[[], Probe[Sequence[MediaServerItem]]],
    ) -> Probe[Sequence[MediaServerItem]]:
        cached = self._children.get(rating_key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        result = fetch()
        self._children[rating_key] = result
        return result
