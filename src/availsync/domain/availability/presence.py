"""Probes shared by the movie and series resolvers."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Protocol

from availsync.domain.model import Variant

from .probe import probe

if TYPE_CHECKING:
    from collections.abc import Sequence

    from availsync.domain.model import MediaRecord
    from availsync.domain.ports import FulfillmentServer, MediaServerClient, MediaServerItem

    from .probe import Probe
    from .session import SyncSession


class _ServerBound(Protocol):
    @property
    def server(self) -> FulfillmentServer: ...


def enabled_for[TClient: _ServerBound](
    clients: Sequence[TClient], variant: Variant
) -> list[TClient]:
    """Sync-enabled fulfillment clients serving ``variant``."""

    return [
        client
        for client in clients
        if client.server.sync_enabled and client.server.variant is variant
    ]


def media_server_presence(
    client: MediaServerClient,
    record: MediaRecord,
    session: SyncSession,
) -> dict[Variant, bool]:
    """Check each variant's rating key against the media server."""

    presence: dict[Variant, bool] = {}
    for variant, state in record.variants():
        if state.rating_key is None:
            presence[variant] = False
            continue
        result = session.observe(
            probe(
                partial(client.get_item, state.rating_key),
                description=f"{variant.label} media server item for {record.describe()}",
            )
        )
        presence[variant] = result.found
    return presence


def media_server_children(
    client: MediaServerClient,
    rating_key: str,
    session: SyncSession,
) -> Probe[Sequence[MediaServerItem]]:
    return session.cache.children(
        rating_key,
        lambda: session.observe(
            probe(
                partial(client.get_children, rating_key),
                description=f"media server children of {rating_key}",
            )
        ),
    )


def lost_variant(exists: dict[Variant, bool]) -> Variant | None:
    """Return the single variant that vanished while the other one remains."""

    standard, enhanced = exists[Variant.STANDARD], exists[Variant.ENHANCED]
    if standard == enhanced:
        return None
    return Variant.ENHANCED if standard else Variant.STANDARD
