"""Port for the media server catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@dataclass(frozen=True, slots=True)
class MediaServerItem:
    """A catalog entry as reported by the media server."""

    rating_key: str
    title: str | None = None
    index: int | None = None  # season number for season children


@runtime_checkable
class MediaServerClient(Protocol):
    """Read-only access to the media server catalog.

    ``None`` means the server does not know the rating key.
    """

    def get_item(self, rating_key: str) -> MediaServerItem | None: ...

    def get_children(self, rating_key: str) -> Sequence[MediaServerItem] | None: ...
