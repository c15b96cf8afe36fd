"""HTTP clients for Radarr (movies) and Sonarr (series) v3 APIs."""

from __future__ import annotations

from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from availsync.adapters.http_resilience import BlockingClient, get_json_or_none
from availsync.domain.ports import TransientAdapterError

from .schema import RadarrMovie, SonarrSeries
from .translator import to_fulfilled_movie, to_fulfilled_series, to_fulfillment_server

if TYPE_CHECKING:
    from collections.abc import Callable

    from availsync.adapters.http_resilience import ResilientClient
    from availsync.config.fulfillment import FulfillmentServerConfig
    from availsync.config.http_resilience import ResilienceConfig
    from availsync.domain.ports import FulfilledMovie, FulfilledSeries, FulfillmentServer

log = getLogger(__name__)


class ServarrAPIError(TransientAdapterError):
    """Raised when a Radarr/Sonarr instance cannot answer a lookup."""


class _ServarrClient:
    kind: str = "servarr"

    def __init__(
        self,
        *,
        config: FulfillmentServerConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._server = to_fulfillment_server(config)
        self._resilience = config.resilience(kind=self.kind)
        self._http = BlockingClient(self._resilience, client_factory=client_factory)

    @property
    def server(self) -> FulfillmentServer:
        return self._server

    def close(self) -> None:
        self._http.close()

    def _fetch[TModel: BaseModel](self, path: str, model: type[TModel]) -> TModel | None:
        return self._http.run(partial(self._fetch_async, path=path, model=model))

    async def _fetch_async[TModel: BaseModel](
        self, client: ResilientClient, path: str, model: type[TModel]
    ) -> TModel | None:
        payload = await get_json_or_none(client, path, error=ServarrAPIError)
        if payload is None:
            log.debug("%s has no resource at %s", self._server.name, path)
            return None
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise ServarrAPIError(
                f"Unexpected payload from {self._server.name} for {path}",
                service=self._resilience.name,
            ) from exc


class RadarrClient(_ServarrClient):
    """Movie fulfillment port backed by one Radarr instance."""

    kind = "radarr"

    def get_movie(self, external_id: int) -> FulfilledMovie | None:
        movie = self._fetch(f"/movie/{external_id}", RadarrMovie)
        return to_fulfilled_movie(movie) if movie is not None else None


class SonarrClient(_ServarrClient):
    """Series fulfillment port backed by one Sonarr instance."""

    kind = "sonarr"

    def get_series(self, external_id: int) -> FulfilledSeries | None:
        series = self._fetch(f"/series/{external_id}", SonarrSeries)
        return to_fulfilled_series(series) if series is not None else None


if TYPE_CHECKING:
    from availsync.domain.ports import MovieFulfillmentClient, SeriesFulfillmentClient

    def _radarr_check(client: RadarrClient) -> MovieFulfillmentClient:
        return client

    def _sonarr_check(client: SonarrClient) -> SeriesFulfillmentClient:
        return client
