"""Persisted availability state for titles and their seasons."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .enums import PRESENT_STATUSES, MediaStatus, MediaType, RequestStatus, Variant

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class VariantState:
    """Status and fulfillment linkage for one variant of a title.

    Field order matters: the SQLAlchemy adapter maps this class as a composite.
    """

    status: MediaStatus = MediaStatus.UNKNOWN
    server_id: int | None = None
    external_service_id: int | None = None
    external_service_slug: str | None = None
    rating_key: str | None = None

    @property
    def is_present(self) -> bool:
        return self.status in PRESENT_STATUSES

    @property
    def has_linkage(self) -> bool:
        return any(
            value is not None
            for value in (
                self.server_id,
                self.external_service_id,
                self.external_service_slug,
                self.rating_key,
            )
        )

    def with_status(self, status: MediaStatus) -> VariantState:
        return replace(self, status=status)

    def cleared(self) -> VariantState:
        return VariantState(status=self.status)


type SeasonSnapshot = tuple[int, MediaStatus, MediaStatus]
type RecordSnapshot = tuple[VariantState, VariantState, tuple[SeasonSnapshot, ...]]


@dataclass(eq=False, kw_only=True)
class SeasonRecord:
    season_number: int
    standard_status: MediaStatus = MediaStatus.UNKNOWN
    enhanced_status: MediaStatus = MediaStatus.UNKNOWN
    id: int | None = None

    def status(self, variant: Variant) -> MediaStatus:
        if variant is Variant.ENHANCED:
            return self.enhanced_status
        return self.standard_status

    def set_status(self, variant: Variant, status: MediaStatus) -> None:
        if variant is Variant.ENHANCED:
            self.enhanced_status = status
        else:
            self.standard_status = status

    def snapshot(self) -> SeasonSnapshot:
        return (self.season_number, self.standard_status, self.enhanced_status)


@dataclass(eq=False, kw_only=True)
class MediaRecord:
    """A title tracked by the request system, with one state slot per variant."""

    tmdb_id: int
    media_type: MediaType
    standard: VariantState = field(default_factory=VariantState)
    enhanced: VariantState = field(default_factory=VariantState)
    seasons: list[SeasonRecord] = field(default_factory=list["SeasonRecord"])
    id: int | None = None

    @property
    def is_series(self) -> bool:
        return self.media_type is MediaType.TV

    def variant(self, variant: Variant) -> VariantState:
        return self.enhanced if variant is Variant.ENHANCED else self.standard

    def set_variant(self, variant: Variant, state: VariantState) -> None:
        if variant is Variant.ENHANCED:
            self.enhanced = state
        else:
            self.standard = state

    def variants(self) -> Iterable[tuple[Variant, VariantState]]:
        yield Variant.STANDARD, self.standard
        yield Variant.ENHANCED, self.enhanced

    @property
    def is_eligible(self) -> bool:
        return self.standard.is_present or self.enhanced.is_present

    def snapshot(self) -> RecordSnapshot:
        """Return a comparable value covering everything the sync may change."""

        return (
            self.standard,
            self.enhanced,
            tuple(season.snapshot() for season in self.seasons),
        )

    def describe(self) -> str:
        return f"{self.media_type} tmdb:{self.tmdb_id}"


@dataclass(eq=False, kw_only=True)
class MediaRequest:
    """Acquisition request as far as availability sync needs to know it."""

    media_id: int
    status: RequestStatus
    variant: Variant = Variant.STANDARD
    id: int | None = None
