"""Three-valued outcome of a single remote probe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from availsync.domain.ports.errors import TransientAdapterError

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)


class ProbeOutcome(StrEnum):
    PRESENT = "present"
    ABSENT = "absent"
    INDETERMINATE = "indeterminate"


@dataclass(frozen=True, slots=True)
class Probe[T]:
    outcome: ProbeOutcome
    value: T | None = None

    @property
    def found(self) -> bool:
        """Indeterminate answers count as absent; there is no retry policy."""

        return self.outcome is ProbeOutcome.PRESENT

    @property
    def is_indeterminate(self) -> bool:
        return self.outcome is ProbeOutcome.INDETERMINATE

    @classmethod
    def present(cls, value: T) -> Probe[T]:
        return cls(ProbeOutcome.PRESENT, value)

    @classmethod
    def absent(cls) -> Probe[T]:
        return cls(ProbeOutcome.ABSENT)

    @classmethod
    def indeterminate(cls) -> Probe[T]:
        return cls(ProbeOutcome.INDETERMINATE)


def probe[T](call: Callable[[], T | None], *, description: str) -> Probe[T]:
    """Run ``call`` and classify the answer.

    ``None`` is the collaborator's NotFound signal. Transient adapter failures are
    logged at DEBUG and reported as indeterminate; anything else propagates.
    """

    try:
        value = call()
    except TransientAdapterError as exc:
        log.debug("Probe failed (%s): %s", description, exc)
        return Probe.indeterminate()
    if value is None:
        return Probe.absent()
    return Probe.present(value)
