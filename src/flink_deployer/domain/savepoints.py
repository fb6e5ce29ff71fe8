"""Savepoint handles and status snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class SavepointPhase(StrEnum):
    """Phase of an asynchronous savepoint operation."""

    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def parse(cls, raw: str | None) -> SavepointPhase:
        """Map a raw status id onto a known phase or `UNRECOGNIZED`."""

        if raw is None:
            return cls.UNRECOGNIZED
        try:
            return cls(raw)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass(slots=True)
class SavepointHandle:
    """Identifies one triggered savepoint operation.

    A handle can be awaited once; `awaited` is set when polling starts.
    """

    job_id: str
    request_id: str
    awaited: bool = field(default=False, compare=False, repr=False)


@dataclass(slots=True, frozen=True)
class SavepointStatus:
    """Status of a savepoint operation as reported by the engine."""

    phase: SavepointPhase
    raw_phase: str | None = None
    location: str | None = None
    failure_cause: str | None = None


__all__ = ["SavepointHandle", "SavepointPhase", "SavepointStatus"]
