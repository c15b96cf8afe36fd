"""SQLAlchemy mapping metadata for availability records.

Each variant is stored as a group of plain columns (``status``/``status_4k``,
``service_id``/``service_id_4k`` ...) and exposed on the domain object as a
``VariantState`` composite.
"""

from __future__ import annotations

import logging
from functools import cache

from sqlalchemy import (
    Boolean,
    Column,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    orm,
)
from sqlalchemy.orm import composite, configure_mappers, relationship

from availsync.domain.model import (
    MediaRecord,
    MediaRequest,
    MediaStatus,
    MediaType,
    RequestStatus,
    SeasonRecord,
    Variant,
    VariantState,
)

log = logging.getLogger(__name__)


class VariantFlag(TypeDecorator[Variant]):
    """Store a ``Variant`` as the ``is_4k`` boolean the request tables use."""

    impl = Boolean
    cache_ok = True

    def process_bind_param(self, value: Variant | None, dialect: Dialect) -> bool | None:
        _ = dialect
        if value is None:
            return None
        return value is Variant.ENHANCED

    def process_result_value(self, value: bool | None, dialect: Dialect) -> Variant | None:
        _ = dialect
        if value is None:
            return None
        return Variant.from_is_4k(value)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _status_column(name: str) -> Column[MediaStatus]:
    return Column(
        name,
        Enum(MediaStatus, native_enum=False),
        nullable=False,
        default=MediaStatus.UNKNOWN,
    )


media_table = Table(
    "media",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("tmdb_id", Integer, nullable=False),
    Column("media_type", Enum(MediaType, native_enum=False), nullable=False),
    _status_column("status"),
    Column("service_id", Integer, nullable=True),
    Column("external_service_id", Integer, nullable=True),
    Column("external_service_slug", String, nullable=True),
    Column("rating_key", String, nullable=True),
    _status_column("status_4k"),
    Column("service_id_4k", Integer, nullable=True),
    Column("external_service_id_4k", Integer, nullable=True),
    Column("external_service_slug_4k", String, nullable=True),
    Column("rating_key_4k", String, nullable=True),
    UniqueConstraint("tmdb_id", "media_type"),
    Index("ix_media_status_status_4k", "status", "status_4k"),
)

season_table = Table(
    "season",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("media_id", Integer, ForeignKey("media.id", ondelete="CASCADE"), nullable=False),
    Column("season_number", Integer, nullable=False),
    Column("status", Enum(MediaStatus, native_enum=False), key="standard_status", nullable=False),
    Column(
        "status_4k",
        Enum(MediaStatus, native_enum=False),
        key="enhanced_status",
        nullable=False,
    ),
    UniqueConstraint("media_id", "season_number"),
)

media_request_table = Table(
    "media_request",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("media_id", Integer, ForeignKey("media.id", ondelete="CASCADE"), nullable=False),
    Column("status", Enum(RequestStatus, native_enum=False), nullable=False),
    Column("is_4k", VariantFlag(), key="variant", nullable=False, default=Variant.STANDARD),
    Index("ix_media_request_media_id_status", "media_id", "status"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(SeasonRecord, season_table)

    mapper_registry.map_imperatively(
        MediaRecord,
        media_table,
        properties={
            "standard": composite(
                VariantState,
                media_table.c.status,
                media_table.c.service_id,
                media_table.c.external_service_id,
                media_table.c.external_service_slug,
                media_table.c.rating_key,
            ),
            "enhanced": composite(
                VariantState,
                media_table.c.status_4k,
                media_table.c.service_id_4k,
                media_table.c.external_service_id_4k,
                media_table.c.external_service_slug_4k,
                media_table.c.rating_key_4k,
            ),
            "seasons": relationship(
                SeasonRecord,
                order_by=season_table.c.season_number,
                cascade="all, delete-orphan",
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(MediaRequest, media_request_table)

    configure_mappers()
    return mapper_registry
