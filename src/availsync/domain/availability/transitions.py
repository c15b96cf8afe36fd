"""Status transitions applied when a title, variant or season stops existing.

The ``plan_*`` helpers are pure and encode the rules; ``StateTransitionEngine``
applies them to a loaded record. Nothing here ever moves a status towards
AVAILABLE: the only outcomes are DELETED and AVAILABLE -> PARTIALLY_AVAILABLE.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from availsync.domain.model import (
    PRESENT_STATUSES,
    TERMINAL_STATUSES,
    MediaStatus,
    Variant,
)

if TYPE_CHECKING:
    from availsync.domain.model import MediaRecord, SeasonRecord, VariantState
    from availsync.domain.ports import RequestRepository

log = getLogger(__name__)


class LinkageChange(StrEnum):
    KEEP = "keep"
    CLEAR = "clear"


@dataclass(frozen=True, slots=True)
class VariantTransition:
    status: MediaStatus
    linkage: LinkageChange = LinkageChange.KEEP

    def apply(self, state: VariantState) -> VariantState:
        updated = state.with_status(self.status)
        if self.linkage is LinkageChange.CLEAR:
            return updated.cleared()
        return updated


def plan_variant(
    current: MediaStatus,
    *,
    exists: bool,
    request_pending: bool = False,
) -> VariantTransition:
    """Decide the new status and linkage for one variant of a title.

    Linkage survives a deletion while an approved request still waits on the
    variant, so the in-flight acquisition keeps its service identifiers.
    """

    if current in TERMINAL_STATUSES or exists or current not in PRESENT_STATUSES:
        return VariantTransition(current)
    linkage = LinkageChange.KEEP if request_pending else LinkageChange.CLEAR
    return VariantTransition(MediaStatus.DELETED, linkage)


def plan_season(current: MediaStatus, *, exists: bool) -> MediaStatus:
    if exists or current not in PRESENT_STATUSES:
        return current
    return MediaStatus.DELETED


def plan_parent_after_season_loss(parent: MediaStatus, season: MediaStatus) -> MediaStatus:
    """A parent marked AVAILABLE cannot keep that status once one of its seasons is gone."""

    if season in TERMINAL_STATUSES and parent is MediaStatus.AVAILABLE:
        return MediaStatus.PARTIALLY_AVAILABLE
    return parent


@dataclass(slots=True)
class StateTransitionEngine:
    requests: RequestRepository

    def apply_variant(self, record: MediaRecord, variant: Variant, *, exists: bool) -> bool:
        """Apply the variant rule; return whether the record changed."""

        state = record.variant(variant)
        if exists or not state.is_present:
            return False
        transition = plan_variant(
            state.status,
            exists=exists,
            request_pending=self._request_pending(record, variant),
        )
        updated = transition.apply(state)
        if updated == state:
            return False
        record.set_variant(variant, updated)
        log.info(
            "%s no longer exists in the %s media server or fulfillment services; "
            "status %s -> %s (linkage %s)",
            record.describe(),
            variant.label,
            state.status,
            updated.status,
            transition.linkage,
        )
        return True

    def apply_season(
        self,
        record: MediaRecord,
        season: SeasonRecord,
        variant: Variant,
        *,
        exists: bool,
    ) -> bool:
        current = season.status(variant)
        updated = plan_season(current, exists=exists)
        if updated == current:
            return False
        season.set_status(variant, updated)
        log.info(
            "Season %s of %s does not exist in the %s media server or fulfillment services; "
            "status %s -> %s",
            season.season_number,
            record.describe(),
            variant.label,
            current,
            updated,
        )
        self._demote_parent(record, variant, updated)
        return True

    def cascade_seasons(self, record: MediaRecord, variant: Variant) -> int:
        """Force every still-present season of ``variant`` to DELETED."""

        changed = 0
        for season in record.seasons:
            if season.status(variant) in PRESENT_STATUSES:
                season.set_status(variant, MediaStatus.DELETED)
                changed += 1
        if changed:
            log.info(
                "Marked %d %s season(s) of %s as deleted",
                changed,
                variant.label,
                record.describe(),
            )
        return changed

    def remove_record(self, record: MediaRecord) -> bool:
        """Handle a title that exists in neither variant anywhere."""

        changed = False
        for variant in Variant:
            changed = self.apply_variant(record, variant, exists=False) or changed
            if record.is_series:
                changed = self.cascade_seasons(record, variant) > 0 or changed
        return changed

    def _demote_parent(self, record: MediaRecord, variant: Variant, season: MediaStatus) -> None:
        parent = record.variant(variant)
        demoted = plan_parent_after_season_loss(parent.status, season)
        if demoted is parent.status:
            return
        record.set_variant(variant, parent.with_status(demoted))
        log.info(
            "Marking %s %s as %s because a season was removed",
            variant.label,
            record.describe(),
            demoted,
        )

    def _request_pending(self, record: MediaRecord, variant: Variant) -> bool:
        if record.id is None:
            return False
        return self.requests.has_approved_unfulfilled_request(media_id=record.id, variant=variant)
