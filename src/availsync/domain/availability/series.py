"""Existence checks for series and their seasons."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import TYPE_CHECKING

from availsync.domain.model import PRESENT_STATUSES, Variant

from .presence import enabled_for, lost_variant, media_server_children, media_server_presence
from .probe import probe

if TYPE_CHECKING:
    from collections.abc import Sequence

    from availsync.domain.model import MediaRecord, SeasonRecord
    from availsync.domain.ports import FulfilledSeries, MediaServerClient, SeriesFulfillmentClient

    from .probe import Probe
    from .session import SyncSession
    from .transitions import StateTransitionEngine

log = getLogger(__name__)


@dataclass(slots=True)
class SeriesExistenceResolver:
    media_server: MediaServerClient
    clients: Sequence[SeriesFulfillmentClient]
    engine: StateTransitionEngine

    def resolve(self, record: MediaRecord, session: SyncSession) -> bool:
        """Return whether any variant of the series still exists.

        Seasons are reconciled first, then a single vanished variant is handled at
        series scope. A series missing in both variants is left to the caller.
        """

        in_media_server = media_server_presence(self.media_server, record, session)
        exists = {
            variant: in_media_server[variant]
            or self._has_episode_files(record, variant, session)
            for variant in Variant
        }

        for season in record.seasons:
            self._reconcile_season(record, season, exists, session)

        lost = lost_variant(exists)
        if lost is not None:
            self.engine.apply_variant(record, lost, exists=False)

        if any(exists.values()):
            log.debug("%s exists in at least one media instance", record.describe())
            return True
        return False

    def _reconcile_season(
        self,
        record: MediaRecord,
        season: SeasonRecord,
        series_exists: dict[Variant, bool],
        session: SyncSession,
    ) -> None:
        for variant in Variant:
            if season.status(variant) not in PRESENT_STATUSES:
                continue
            exists = self._season_in_media_server(record, season, variant, session) or (
                series_exists[variant]
                and self._season_has_episode_files(record, season, variant, session)
            )
            self.engine.apply_season(record, season, variant, exists=exists)

    def _season_in_media_server(
        self,
        record: MediaRecord,
        season: SeasonRecord,
        variant: Variant,
        session: SyncSession,
    ) -> bool:
        rating_key = record.variant(variant).rating_key
        if rating_key is None:
            return False
        children = media_server_children(self.media_server, rating_key, session)
        if children.value is None:
            return False
        return any(child.index == season.season_number for child in children.value)

    def _has_episode_files(
        self, record: MediaRecord, variant: Variant, session: SyncSession
    ) -> bool:
        external_id = record.variant(variant).external_service_id
        if external_id is None:
            return False
        for client in enabled_for(self.clients, variant):
            result = self._series(client, external_id, session)
            if result.value is not None and result.value.episode_file_count > 0:
                return True
        return False

    def _season_has_episode_files(
        self,
        record: MediaRecord,
        season: SeasonRecord,
        variant: Variant,
        session: SyncSession,
    ) -> bool:
        external_id = record.variant(variant).external_service_id
        if external_id is None:
            return False
        for client in enabled_for(self.clients, variant):
            result = self._series(client, external_id, session)
            if result.value is None:
                continue
            statistics = result.value.season(season.season_number)
            if statistics is not None and statistics.episode_file_count > 0:
                return True
        return False

    def _series(
        self,
        client: SeriesFulfillmentClient,
        external_id: int,
        session: SyncSession,
    ) -> Probe[FulfilledSeries]:
        return session.cache.series(
            client.server.id,
            external_id,
            lambda: session.observe(
                probe(
                    partial(client.get_series, external_id),
                    description=f"{client.server.name} series {external_id}",
                )
            ),
        )
