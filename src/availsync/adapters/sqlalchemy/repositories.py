"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import or_, select

from availsync.adapters.sqlalchemy.mappings import media_request_table, media_table
from availsync.domain.model import PRESENT_STATUSES, MediaRecord, RequestStatus

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from availsync.domain.model import Variant


class SqlAlchemyMediaRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load_eligible_page(self, *, offset: int, limit: int) -> list[MediaRecord]:
        present = tuple(PRESENT_STATUSES)
        stmt = (
            select(MediaRecord)
            .where(
                or_(
                    media_table.c.status.in_(present),
                    media_table.c.status_4k.in_(present),
                )
            )
            .order_by(media_table.c.id)
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().all())

    def save(self, record: MediaRecord) -> None:
        self.session.add(record)


class SqlAlchemyRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def has_approved_unfulfilled_request(self, *, media_id: int, variant: Variant) -> bool:
        stmt = (
            select(media_request_table.c.id)
            .where(media_request_table.c.media_id == media_id)
            .where(media_request_table.c.status == RequestStatus.APPROVED)
            .where(media_request_table.c.variant == variant)
            .limit(1)
        )
        return self.session.execute(stmt).scalar_one_or_none() is not None
