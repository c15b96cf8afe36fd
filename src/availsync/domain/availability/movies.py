"""Existence checks for movies."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from availsync.domain.model import Variant

from .presence import enabled_for, lost_variant, media_server_presence
from .probe import probe

if TYPE_CHECKING:
    from collections.abc import Sequence

    from availsync.domain.model import MediaRecord
    from availsync.domain.ports import MediaServerClient, MovieFulfillmentClient

    from .session import SyncSession
    from .transitions import StateTransitionEngine

log = getLogger(__name__)


@dataclass(slots=True)
class MovieExistenceResolver:
    media_server: MediaServerClient
    clients: Sequence[MovieFulfillmentClient]
    engine: StateTransitionEngine

    def resolve(self, record: MediaRecord, session: SyncSession) -> bool:
        """Return whether any variant of the movie still exists.

        When exactly one variant vanished, that variant is updated here and the
        surviving one is left untouched.
        """

        in_media_server = media_server_presence(self.media_server, record, session)
        if all(in_media_server.values()):
            return True

        exists = {
            variant: in_media_server[variant] or self._has_file(record, variant, session)
            for variant in Variant
        }

        lost = lost_variant(exists)
        if lost is not None:
            self.engine.apply_variant(record, lost, exists=False)

        if any(exists.values()):
            log.debug("%s exists in at least one media instance", record.describe())
            return True
        return False

    def _has_file(self, record: MediaRecord, variant: Variant, session: SyncSession) -> bool:
        external_id = record.variant(variant).external_service_id
        if external_id is None:
            return False
        for client in enabled_for(self.clients, variant):
            result = session.observe(
                probe(
                    partial(client.get_movie, external_id),
                    description=f"{client.server.name} movie {external_id}",
                )
            )
            if result.value is not None and result.value.has_file:
                return True
        return False
