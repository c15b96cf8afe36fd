"""Run lifecycle for availability syncs.

One run rescans every eligible record page by page, re-derives its
availability from the media server and the fulfillment services, and writes
back only records whose state actually changed.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .movies import MovieExistenceResolver
from .series import SeriesExistenceResolver
from .session import CancellationToken, SyncSession, SyncStats
from .transitions import StateTransitionEngine

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from availsync.domain.model import MediaRecord
    from availsync.domain.ports import (
        AvailabilityUnitOfWork,
        MediaServerClient,
        MovieFulfillmentClient,
        SeriesFulfillmentClient,
    )

log = getLogger(__name__)

DEFAULT_PAGE_SIZE = 50

_RUN_GUARD = threading.Lock()


class SyncAlreadyRunningError(RuntimeError):
    """Raised when a run is requested while another one is active."""


class SyncAborted(Exception):  # noqa: N818
    """Internal signal: the run was cancelled between two records."""


class RunOutcome(StrEnum):
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncResult:
    outcome: RunOutcome
    stats: SyncStats


@dataclass(slots=True)
class _Resolvers:
    engine: StateTransitionEngine
    movie: MovieExistenceResolver
    series: SeriesExistenceResolver


class AvailabilitySync:
    """Reconcile persisted availability with the media server and fulfillment services."""

    def __init__(
        self,
        *,
        media_server: MediaServerClient,
        unit_of_work_factory: Callable[[], AvailabilityUnitOfWork],
        movie_clients: Sequence[MovieFulfillmentClient] = (),
        series_clients: Sequence[SeriesFulfillmentClient] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        run_guard: threading.Lock | None = None,
    ) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        self.media_server = media_server
        self.movie_clients = tuple(movie_clients)
        self.series_clients = tuple(series_clients)
        self.page_size = page_size
        self._unit_of_work_factory = unit_of_work_factory
        self._guard = run_guard or _RUN_GUARD
        self._active_token: CancellationToken | None = None

    @property
    def running(self) -> bool:
        return self._guard.locked()

    def run(self, *, token: CancellationToken | None = None) -> SyncResult:
        """Execute one full pass; fails fast if another pass is in progress."""

        if not self._guard.acquire(blocking=False):
            raise SyncAlreadyRunningError("Availability sync is already running")
        session = SyncSession(token=token or CancellationToken())
        self._active_token = session.token
        try:
            log.info("Starting availability sync (page_size=%s)", self.page_size)
            outcome = self._run(session)
        finally:
            self._active_token = None
            self._guard.release()

        stats = session.stats
        log.info(
            "Availability sync %s: processed=%s, updated=%s, failed=%s, indeterminate_probes=%s",
            outcome,
            stats.processed,
            stats.updated,
            stats.failed,
            stats.indeterminate_probes,
        )
        log.debug("Lookup cache: hits=%s, misses=%s", session.cache.hits, session.cache.misses)
        return SyncResult(outcome=outcome, stats=stats)

    def cancel(self) -> None:
        """Ask the active run to stop after the record in flight."""

        token = self._active_token
        if token is not None:
            token.cancel()

    def _run(self, session: SyncSession) -> RunOutcome:
        offset = 0
        try:
            while True:
                with self._unit_of_work_factory() as uow:
                    page = list(
                        uow.repositories.media.load_eligible_page(
                            offset=offset,
                            limit=self.page_size,
                        )
                    )
                    if not page:
                        break
                    resolvers = self._build_resolvers(uow)
                    dropped = 0
                    for record in page:
                        if session.token.cancelled:
                            raise SyncAborted
                        written = self._process(record, uow, resolvers, session)
                        if written and not record.is_eligible:
                            dropped += 1
                # Records that left the eligible set no longer occupy a slot.
                offset += len(page) - dropped
        except SyncAborted:
            log.info("Availability sync aborted by request")
            return RunOutcome.ABORTED
        except Exception:
            log.exception("Failed to complete availability sync")
            return RunOutcome.FAILED
        return RunOutcome.COMPLETED

    def _build_resolvers(self, uow: AvailabilityUnitOfWork) -> _Resolvers:
        engine = StateTransitionEngine(requests=uow.repositories.requests)
        return _Resolvers(
            engine=engine,
            movie=MovieExistenceResolver(self.media_server, self.movie_clients, engine),
            series=SeriesExistenceResolver(self.media_server, self.series_clients, engine),
        )

    def _process(
        self,
        record: MediaRecord,
        uow: AvailabilityUnitOfWork,
        resolvers: _Resolvers,
        session: SyncSession,
    ) -> bool:
        """Reconcile one record; return whether a change was written."""

        before = record.snapshot()
        try:
            resolver = resolvers.series if record.is_series else resolvers.movie
            if not resolver.resolve(record, session):
                log.info(
                    "%s does not exist in any media instance; marking present variants deleted",
                    record.describe(),
                )
                resolvers.engine.remove_record(record)

            if record.snapshot() == before:
                return False
            uow.repositories.media.save(record)
            uow.commit()
        except Exception:
            session.stats.failed += 1
            uow.rollback()
            log.exception("Failed to reconcile %s", record.describe())
            return False
        else:
            session.stats.updated += 1
            return True
        finally:
            session.stats.processed += 1
