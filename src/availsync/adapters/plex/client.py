"""HTTP client for the Plex library metadata endpoints."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from availsync.adapters.http_resilience import BlockingClient, get_json_or_none
from availsync.domain.ports import TransientAdapterError

from .schema import PlexMediaContainer, PlexResponse
from .translator import to_media_server_item

if TYPE_CHECKING:
    from collections.abc import Callable

    from availsync.adapters.http_resilience import ResilientClient
    from availsync.config.http_resilience import ResilienceConfig
    from availsync.config.media_server import MediaServerConfig
    from availsync.domain.ports import MediaServerItem

log = getLogger(__name__)


class PlexAPIError(TransientAdapterError):
    """Raised when Plex cannot answer a metadata lookup."""


class PlexClient:
    """Media server port backed by the Plex HTTP API."""

    def __init__(
        self,
        *,
        config: MediaServerConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._http = BlockingClient(config.resilience, client_factory=client_factory)

    def get_item(self, rating_key: str) -> MediaServerItem | None:
        container = self._fetch(f"/library/metadata/{rating_key}")
        if container is None or not container.metadata:
            return None
        return to_media_server_item(container.metadata[0])

    def get_children(self, rating_key: str) -> list[MediaServerItem] | None:
        container = self._fetch(f"/library/metadata/{rating_key}/children")
        if container is None:
            return None
        return [to_media_server_item(child) for child in container.metadata]

    def close(self) -> None:
        self._http.close()

    def _fetch(self, path: str) -> PlexMediaContainer | None:
        return self._http.run(partial(self._fetch_async, path=path))

    async def _fetch_async(self, client: ResilientClient, path: str) -> PlexMediaContainer | None:
        payload = await get_json_or_none(client, path, error=PlexAPIError)
        if payload is None:
            log.debug("Plex has no metadata at %s", path)
            return None
        try:
            return PlexResponse.model_validate(payload).media_container
        except ValidationError as exc:
            raise PlexAPIError(f"Unexpected Plex payload for {path}", service="plex") from exc

