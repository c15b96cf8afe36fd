"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from availsync.adapters.http_resilience import Closeable
from availsync.adapters.plex import PlexClient
from availsync.adapters.servarr import RadarrClient, SonarrClient
from availsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyAvailabilityUnitOfWork,
    is_started,
    startup,
)
from availsync.config import (
    get_media_server_config,
    get_page_size,
    get_radarr_servers,
    get_sonarr_servers,
)
from availsync.domain.availability import AvailabilitySync
from availsync.domain.ports import AvailabilityUnitOfWork

if TYPE_CHECKING:
    from availsync.config import FulfillmentServerConfig
    from availsync.domain.availability import CancellationToken, SyncResult
    from availsync.domain.ports import (
        MediaServerClient,
        MovieFulfillmentClient,
        SeriesFulfillmentClient,
    )

UnitOfWorkFactory = Callable[[], AvailabilityUnitOfWork]

log = getLogger(__name__)


def _enabled(servers: Sequence[FulfillmentServerConfig]) -> list[FulfillmentServerConfig]:
    enabled = [server for server in servers if server.sync_enabled]
    for server in servers:
        if not server.sync_enabled:
            log.debug("Skipping %s: sync disabled", server.name)
    return enabled


def build_availability_sync(
    *,
    media_server: MediaServerClient | None = None,
    movie_clients: Sequence[MovieFulfillmentClient] | None = None,
    series_clients: Sequence[SeriesFulfillmentClient] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    page_size: int | None = None,
) -> AvailabilitySync:
    """Wire the configured adapters into an ``AvailabilitySync``.

    Anything passed explicitly wins over configuration; the SQLAlchemy adapter
    is only started when no unit of work factory is supplied.
    """

    if unit_of_work_factory is None and not is_started():
        startup()
    effective_media_server = media_server or PlexClient(config=get_media_server_config())
    effective_movie_clients = (
        movie_clients
        if movie_clients is not None
        else [RadarrClient(config=server) for server in _enabled(get_radarr_servers())]
    )
    effective_series_clients = (
        series_clients
        if series_clients is not None
        else [SonarrClient(config=server) for server in _enabled(get_sonarr_servers())]
    )
    effective_page_size = page_size if page_size is not None else get_page_size()

    log.info(
        "Configured availability sync: movie_servers=%s, series_servers=%s, page_size=%s",
        len(effective_movie_clients),
        len(effective_series_clients),
        effective_page_size,
    )
    return AvailabilitySync(
        media_server=effective_media_server,
        unit_of_work_factory=unit_of_work_factory or SqlAlchemyAvailabilityUnitOfWork,
        movie_clients=effective_movie_clients,
        series_clients=effective_series_clients,
        page_size=effective_page_size,
    )


def run_availability_sync(
    *,
    sync: AvailabilitySync | None = None,
    token: CancellationToken | None = None,
    page_size: int | None = None,
) -> SyncResult:
    """Run one availability pass using the configured adapters."""

    if sync is not None:
        return sync.run(token=token)
    owned = build_availability_sync(page_size=page_size)
    try:
        return owned.run(token=token)
    finally:
        close_availability_sync(owned)


def close_availability_sync(sync: AvailabilitySync) -> None:
    """Release the HTTP resources held by the sync's adapters."""

    for adapter in (sync.media_server, *sync.movie_clients, *sync.series_clients):
        if isinstance(adapter, Closeable):
            adapter.close()
