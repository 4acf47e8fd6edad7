"""
Note Model.

Domain entity for a reminder note and its risk and status enums.
A note moves between statuses only through the transition methods
below, so the paired timestamp always agrees with the status.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from uuid import uuid4

from modules.remind.core.utils import utc_now

HIGH_RISK_THRESHOLD = 4


class RiskLevel(IntEnum):
    """Urgency of a note. Higher values sort first."""

    LOW = 1
    MODERATE = 2
    HIGH = 3
    URGENT = 4
    CRITICAL = 5

    @property
    def label(self) -> str:
        return RISK_LABELS[self]

    @property
    def color(self) -> str:
        return RISK_COLORS[self]

    @property
    def is_high_risk(self) -> bool:
        return self >= HIGH_RISK_THRESHOLD


RISK_LABELS = {
    RiskLevel.LOW: "Low Risk",
    RiskLevel.MODERATE: "Moderate",
    RiskLevel.HIGH: "High",
    RiskLevel.URGENT: "Urgent",
    RiskLevel.CRITICAL: "Critical",
}

RISK_COLORS = {
    RiskLevel.LOW: "green",
    RiskLevel.MODERATE: "yellow",
    RiskLevel.HIGH: "orange",
    RiskLevel.URGENT: "red",
    RiskLevel.CRITICAL: "purple",
}


class NoteStatus(str, Enum):
    """Lifecycle state of a note."""

    ACTIVE = "active"
    COMPLETED = "completed"
    SNOOZED = "snoozed"


def new_note_id() -> str:
    return str(uuid4())


@dataclass
class Note:
    """
    A short reminder with a risk level and optional due date.

    Invariants:
    - completed_at is set if and only if status is COMPLETED
    - snooze_until is set if and only if status is SNOOZED
    - id never changes
    """

    text: str
    risk: RiskLevel
    status: NoteStatus = NoteStatus.ACTIVE
    id: str = field(default_factory=new_note_id)
    created_at: datetime = field(default_factory=utc_now)
    completed_at: datetime | None = None
    due_date: datetime | None = None
    snooze_until: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is NoteStatus.ACTIVE

    @property
    def is_completed(self) -> bool:
        return self.status is NoteStatus.COMPLETED

    @property
    def is_snoozed(self) -> bool:
        return self.status is NoteStatus.SNOOZED

    def complete(self, at: datetime) -> None:
        """Mark the note completed at the given time."""
        self.status = NoteStatus.COMPLETED
        self.completed_at = at
        self.snooze_until = None

    def snooze(self, until: datetime) -> None:
        """Hide the note until the given time."""
        self.status = NoteStatus.SNOOZED
        self.snooze_until = until
        self.completed_at = None

    def wake(self) -> None:
        """Return a snoozed note to the active list."""
        self.status = NoteStatus.ACTIVE
        self.snooze_until = None

    def should_wake(self, now: datetime) -> bool:
        return (
            self.status is NoteStatus.SNOOZED
            and self.snooze_until is not None
            and self.snooze_until <= now
        )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, risk={int(self.risk)}, status={self.status.value}, text={self.text!r})>"
