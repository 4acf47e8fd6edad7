"""
Notification Identifier Scheme.

Every scheduled notification is keyed by a string derived from the note
id. The note id is always the part after the last underscore, or the
whole identifier for snooze wake-ups:

    <note_id>              snooze wake-up
    high_risk_<note_id>    recurring high-risk reminder
    due_<tag>_<note_id>    due-date reminder, tag in 15m/1h/3h

Note ids are UUID strings and contain no underscores.
"""

from datetime import timedelta
from uuid import UUID

SEPARATOR = "_"
HIGH_RISK_PREFIX = "high_risk"
DUE_PREFIX = "due"

# (tag, lead time before the due date), nearest first
DUE_LEAD_INTERVALS: tuple[tuple[str, timedelta], ...] = (
    ("15m", timedelta(minutes=15)),
    ("1h", timedelta(hours=1)),
    ("3h", timedelta(hours=3)),
)


def snooze_identifier(note_id: str) -> str:
    return note_id


def high_risk_identifier(note_id: str) -> str:
    return f"{HIGH_RISK_PREFIX}{SEPARATOR}{note_id}"


def due_identifier(tag: str, note_id: str) -> str:
    return f"{DUE_PREFIX}{SEPARATOR}{tag}{SEPARATOR}{note_id}"


def identifiers_for(note_id: str) -> list[str]:
    """Every identifier the scheduler can produce for a note."""
    return [
        snooze_identifier(note_id),
        high_risk_identifier(note_id),
        *(due_identifier(tag, note_id) for tag, _ in DUE_LEAD_INTERVALS),
    ]


def note_id_from_identifier(identifier: str) -> str | None:
    """
    Recover the note id from a notification identifier.

    Returns:
        The note id, or None if the identifier does not end in a UUID
    """
    if not identifier:
        return None
    candidate = identifier.rsplit(SEPARATOR, 1)[-1]
    try:
        UUID(candidate)
    except ValueError:
        return None
    return candidate
