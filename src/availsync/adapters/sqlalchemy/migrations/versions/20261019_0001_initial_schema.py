"""Initial availability schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

_MEDIA_STATUS = sa.Enum(
    "UNKNOWN",
    "PENDING",
    "PROCESSING",
    "PARTIALLY_AVAILABLE",
    "AVAILABLE",
    "DELETED",
    name="mediastatus",
    native_enum=False,
)


def upgrade() -> None:
    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column(
            "media_type",
            sa.Enum("MOVIE", "TV", name="mediatype", native_enum=False),
            nullable=False,
        ),
        sa.Column("status", _MEDIA_STATUS, nullable=False),
        sa.Column("service_id", sa.Integer(), nullable=True),
        sa.Column("external_service_id", sa.Integer(), nullable=True),
        sa.Column("external_service_slug", sa.String(), nullable=True),
        sa.Column("rating_key", sa.String(), nullable=True),
        sa.Column("status_4k", _MEDIA_STATUS, nullable=False),
        sa.Column("service_id_4k", sa.Integer(), nullable=True),
        sa.Column("external_service_id_4k", sa.Integer(), nullable=True),
        sa.Column("external_service_slug_4k", sa.String(), nullable=True),
        sa.Column("rating_key_4k", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_media"),
        sa.UniqueConstraint("tmdb_id", "media_type", name="uq_media_tmdb_id"),
    )
    op.create_index("ix_media_status_status_4k", "media", ["status", "status_4k"])

    op.create_table(
        "season",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("media_id", sa.Integer(), nullable=False),
        sa.Column("season_number", sa.Integer(), nullable=False),
        sa.Column("status", _MEDIA_STATUS, nullable=False),
        sa.Column("status_4k", _MEDIA_STATUS, nullable=False),
        sa.ForeignKeyConstraint(
            ["media_id"],
            ["media.id"],
            name="fk_season_media_id_media",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_season"),
        sa.UniqueConstraint("media_id", "season_number", name="uq_season_media_id"),
    )

    op.create_table(
        "media_request",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("media_id", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "PENDING",
                "APPROVED",
                "DECLINED",
                "FAILED",
                "COMPLETED",
                name="requeststatus",
                native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column("is_4k", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["media_id"],
            ["media.id"],
            name="fk_media_request_media_id_media",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_media_request"),
    )
    op.create_index(
        "ix_media_request_media_id_status",
        "media_request",
        ["media_id", "status"],
    )


def downgrade() -> None:
    op.drop_index("ix_media_request_media_id_status", table_name="media_request")
    op.drop_table("media_request")
    op.drop_table("season")
    op.drop_index("ix_media_status_status_4k", table_name="media")
    op.drop_table("media")
