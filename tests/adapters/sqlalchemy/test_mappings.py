from __future__ import annotations

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session  # noqa: TC002

from availsync.adapters.sqlalchemy.mappings import media_request_table, media_table
from availsync.domain.model import MediaRequest, MediaStatus, RequestStatus, Variant
from tests.helpers.media import linked, make_movie


def test_migrations_create_expected_tables(sqlite_engine: Engine) -> None:
    tables = set(inspect(sqlite_engine).get_table_names())

    assert {"media", "season", "media_request", "alembic_version"} <= tables
    media_columns = {column["name"] for column in inspect(sqlite_engine).get_columns("media")}
    assert {"status", "status_4k", "rating_key", "rating_key_4k"} <= media_columns


def test_variant_state_maps_onto_suffixed_columns(sqlite_session: Session) -> None:
    sqlite_session.add(
        make_movie(
            1,
            standard=linked(rating_key="std", external_id=10, server_id=1),
            enhanced=linked(MediaStatus.PARTIALLY_AVAILABLE, rating_key="4k", server_id=2),
        )
    )
    sqlite_session.commit()

    row = sqlite_session.execute(
        select(
            media_table.c.status,
            media_table.c.rating_key,
            media_table.c.external_service_id,
            media_table.c.status_4k,
            media_table.c.rating_key_4k,
            media_table.c.service_id_4k,
        )
    ).one()

    assert tuple(row) == (
        MediaStatus.AVAILABLE,
        "std",
        10,
        MediaStatus.PARTIALLY_AVAILABLE,
        "4k",
        2,
    )


def test_request_variant_is_stored_as_is_4k_flag(sqlite_session: Session) -> None:
    sqlite_session.add(make_movie(1, standard=linked()))
    sqlite_session.add(
        MediaRequest(media_id=1, status=RequestStatus.APPROVED, variant=Variant.ENHANCED)
    )
    sqlite_session.commit()

    raw = sqlite_session.execute(select(media_request_table.c.variant)).scalar_one()

    assert raw is Variant.ENHANCED
    connection = sqlite_session.connection()
    stored = connection.exec_driver_sql("SELECT is_4k FROM media_request").scalar_one()
    assert stored == 1
