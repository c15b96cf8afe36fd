from __future__ import annotations

from availsync.domain.availability import (
    MovieExistenceResolver,
    StateTransitionEngine,
    SyncSession,
)
from availsync.domain.model import MediaStatus, Variant, VariantState
from tests.helpers.media import (
    FakeMediaServer,
    FakeMovieClient,
    FakeRequestRepository,
    linked,
    make_movie,
    make_server,
)


def _resolver(
    media_server: FakeMediaServer,
    clients: list[FakeMovieClient] | None = None,
    requests: FakeRequestRepository | None = None,
) -> MovieExistenceResolver:
    engine = StateTransitionEngine(requests=requests or FakeRequestRepository())
    return MovieExistenceResolver(media_server, clients or [], engine)


def test_both_variants_in_media_server_short_circuits() -> None:
    client = FakeMovieClient(make_server(), {10: True})
    record = make_movie(
        1,
        standard=linked(rating_key="std", external_id=10),
        enhanced=linked(rating_key="4k", external_id=11),
    )
    before = record.snapshot()

    assert _resolver(FakeMediaServer(["std", "4k"]), [client]).resolve(record, SyncSession())

    assert client.calls == []
    assert record.snapshot() == before


def test_lost_enhanced_variant_is_handled_independently() -> None:
    record = make_movie(
        1,
        standard=linked(rating_key="std", external_id=10),
        enhanced=linked(rating_key="4k", external_id=11),
    )

    exists = _resolver(FakeMediaServer(["std"])).resolve(record, SyncSession())

    assert exists
    assert record.enhanced == VariantState(status=MediaStatus.DELETED)
    assert record.standard == linked(rating_key="std", external_id=10)


def test_file_at_fulfillment_server_counts_as_existing() -> None:
    client = FakeMovieClient(make_server(), {10: True})
    record = make_movie(1, standard=linked(rating_key="std", external_id=10))
    before = record.snapshot()

    exists = _resolver(FakeMediaServer(), [client]).resolve(record, SyncSession())

    assert exists
    assert client.calls == [10]
    assert record.snapshot() == before


def test_movie_without_file_is_not_existing() -> None:
    client = FakeMovieClient(make_server(), {10: False})
    record = make_movie(1, standard=linked(rating_key="std", external_id=10))

    assert not _resolver(FakeMediaServer(), [client]).resolve(record, SyncSession())


def test_no_media_server_hit_and_no_servers_reports_missing() -> None:
    record = make_movie(1, standard=linked(rating_key="K"))

    assert not _resolver(FakeMediaServer()).resolve(record, SyncSession())
    # The orchestrator owns the double-deletion path.
    assert record.standard.status is MediaStatus.AVAILABLE


def test_only_matching_and_enabled_servers_are_asked() -> None:
    enhanced_client = FakeMovieClient(make_server(2, variant=Variant.ENHANCED), {10: True})
    disabled_client = FakeMovieClient(make_server(3, sync_enabled=False), {10: True})
    record = make_movie(1, standard=linked(external_id=10))

    exists = _resolver(FakeMediaServer(), [enhanced_client, disabled_client]).resolve(
        record, SyncSession()
    )

    assert not exists
    assert enhanced_client.calls == []
    assert disabled_client.calls == []


def test_unreachable_server_is_treated_as_absent() -> None:
    client = FakeMovieClient(make_server(), {10: True}, unavailable=True)
    record = make_movie(
        1,
        standard=linked(rating_key="std", external_id=10),
        enhanced=linked(rating_key="4k"),
    )
    session = SyncSession()

    exists = _resolver(FakeMediaServer(["4k"]), [client]).resolve(record, session)

    assert exists
    assert record.standard == VariantState(status=MediaStatus.DELETED)
    assert session.stats.indeterminate_probes == 1
