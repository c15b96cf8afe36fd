from __future__ import annotations

import pytest

from availsync.domain.availability import (
    LinkageChange,
    StateTransitionEngine,
    VariantTransition,
    plan_parent_after_season_loss,
    plan_season,
    plan_variant,
)
from availsync.domain.model import MediaStatus, Variant, VariantState
from tests.helpers.media import FakeRequestRepository, linked, make_movie, make_series

PRESENT = (MediaStatus.AVAILABLE, MediaStatus.PARTIALLY_AVAILABLE)
TERMINAL = (MediaStatus.DELETED, MediaStatus.UNKNOWN)


@pytest.mark.parametrize("status", TERMINAL)
@pytest.mark.parametrize("exists", [True, False])
def test_terminal_statuses_never_change(status: MediaStatus, exists: bool) -> None:  # noqa: FBT001
    assert plan_variant(status, exists=exists) == VariantTransition(status)


@pytest.mark.parametrize("status", PRESENT)
def test_lost_variant_is_deleted_and_unlinked(status: MediaStatus) -> None:
    transition = plan_variant(status, exists=False)

    assert transition.status is MediaStatus.DELETED
    assert transition.linkage is LinkageChange.CLEAR


def test_pending_request_keeps_linkage() -> None:
    transition = plan_variant(MediaStatus.AVAILABLE, exists=False, request_pending=True)

    assert transition == VariantTransition(MediaStatus.DELETED, LinkageChange.KEEP)


@pytest.mark.parametrize("status", [MediaStatus.PENDING, MediaStatus.PROCESSING])
def test_in_flight_statuses_are_left_alone(status: MediaStatus) -> None:
    assert plan_variant(status, exists=False).status is status


def test_existing_variant_keeps_status() -> None:
    assert plan_variant(MediaStatus.AVAILABLE, exists=True) == VariantTransition(
        MediaStatus.AVAILABLE
    )


def test_transitions_never_produce_present_statuses_from_absence() -> None:
    for status in MediaStatus:
        for pending in (True, False):
            planned = plan_variant(status, exists=False, request_pending=pending).status
            if status not in PRESENT:
                assert planned is status
            else:
                assert planned is MediaStatus.DELETED


def test_clear_transition_unsets_every_linkage_field() -> None:
    state = linked(rating_key="k", external_id=7)

    updated = VariantTransition(MediaStatus.DELETED, LinkageChange.CLEAR).apply(state)

    assert updated == VariantState(status=MediaStatus.DELETED)
    assert not updated.has_linkage


def test_season_rule() -> None:
    assert plan_season(MediaStatus.AVAILABLE, exists=False) is MediaStatus.DELETED
    assert plan_season(MediaStatus.AVAILABLE, exists=True) is MediaStatus.AVAILABLE
    assert plan_season(MediaStatus.UNKNOWN, exists=False) is MediaStatus.UNKNOWN


@pytest.mark.parametrize("season", TERMINAL)
def test_parent_demotion_only_from_available(season: MediaStatus) -> None:
    assert (
        plan_parent_after_season_loss(MediaStatus.AVAILABLE, season)
        is MediaStatus.PARTIALLY_AVAILABLE
    )
    assert (
        plan_parent_after_season_loss(MediaStatus.PARTIALLY_AVAILABLE, season)
        is MediaStatus.PARTIALLY_AVAILABLE
    )
    assert plan_parent_after_season_loss(MediaStatus.DELETED, season) is MediaStatus.DELETED


def test_apply_variant_clears_only_the_lost_variant() -> None:
    record = make_movie(
        1,
        standard=linked(rating_key="std", external_id=10),
        enhanced=linked(rating_key="4k", external_id=11),
    )
    engine = StateTransitionEngine(requests=FakeRequestRepository())

    assert engine.apply_variant(record, Variant.ENHANCED, exists=False)

    assert record.enhanced == VariantState(status=MediaStatus.DELETED)
    assert record.standard == linked(rating_key="std", external_id=10)


def test_apply_variant_preserves_linkage_for_approved_request() -> None:
    requests = FakeRequestRepository(approved=[(1, Variant.STANDARD)])
    record = make_movie(1, standard=linked(rating_key="std", external_id=10))
    engine = StateTransitionEngine(requests=requests)

    engine.apply_variant(record, Variant.STANDARD, exists=False)

    assert record.standard == linked(MediaStatus.DELETED, rating_key="std", external_id=10)
    assert requests.calls == [(1, Variant.STANDARD)]


def test_apply_variant_skips_request_lookup_when_nothing_changes() -> None:
    requests = FakeRequestRepository()
    record = make_movie(1, standard=linked(MediaStatus.DELETED))
    engine = StateTransitionEngine(requests=requests)

    assert not engine.apply_variant(record, Variant.STANDARD, exists=False)
    assert not engine.apply_variant(record, Variant.ENHANCED, exists=False)
    assert requests.calls == []


def test_apply_season_demotes_available_parent() -> None:
    record = make_series(
        1,
        standard=linked(rating_key="show"),
        seasons=[(1, MediaStatus.AVAILABLE, MediaStatus.UNKNOWN)],
    )
    engine = StateTransitionEngine(requests=FakeRequestRepository())

    assert engine.apply_season(record, record.seasons[0], Variant.STANDARD, exists=False)

    assert record.seasons[0].standard_status is MediaStatus.DELETED
    assert record.standard.status is MediaStatus.PARTIALLY_AVAILABLE
    assert record.standard.rating_key == "show"


def test_cascade_seasons_only_touches_present_seasons() -> None:
    record = make_series(
        1,
        seasons=[
            (1, MediaStatus.AVAILABLE, MediaStatus.PARTIALLY_AVAILABLE),
            (2, MediaStatus.PENDING, MediaStatus.AVAILABLE),
            (3, MediaStatus.UNKNOWN, MediaStatus.DELETED),
        ],
    )
    engine = StateTransitionEngine(requests=FakeRequestRepository())

    assert engine.cascade_seasons(record, Variant.STANDARD) == 1
    assert engine.cascade_seasons(record, Variant.ENHANCED) == 2

    assert [season.snapshot() for season in record.seasons] == [
        (1, MediaStatus.DELETED, MediaStatus.DELETED),
        (2, MediaStatus.PENDING, MediaStatus.DELETED),
        (3, MediaStatus.UNKNOWN, MediaStatus.DELETED),
    ]


def test_remove_record_deletes_both_variants_and_seasons() -> None:
    record = make_series(
        1,
        standard=linked(rating_key="a"),
        enhanced=linked(MediaStatus.PARTIALLY_AVAILABLE, rating_key="b"),
        seasons=[(1, MediaStatus.AVAILABLE, MediaStatus.AVAILABLE)],
    )
    engine = StateTransitionEngine(requests=FakeRequestRepository())

    assert engine.remove_record(record)

    assert record.standard == VariantState(status=MediaStatus.DELETED)
    assert record.enhanced == VariantState(status=MediaStatus.DELETED)
    assert record.seasons[0].snapshot() == (1, MediaStatus.DELETED, MediaStatus.DELETED)
    assert not engine.remove_record(record)
