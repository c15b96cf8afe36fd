"""Public interface for the Plex adapter."""

from __future__ import annotations

from .client import PlexAPIError, PlexClient
from .schema import PlexMediaContainer, PlexMetadata, PlexResponse
from .translator import to_media_server_item

__all__ = [
    "PlexAPIError",
    "PlexClient",
    "PlexMediaContainer",
    "PlexMetadata",
    "PlexResponse",
    "to_media_server_item",
]
