"""Translate Plex payloads into media server port values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from availsync.domain.ports import MediaServerItem

if TYPE_CHECKING:
    from .schema import PlexMetadata


def to_media_server_item(metadata: PlexMetadata) -> MediaServerItem:
    return MediaServerItem(
        rating_key=metadata.rating_key,
        title=metadata.title,
        index=metadata.index,
    )
