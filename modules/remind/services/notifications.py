"""
Notification Scheduler.

Translates note state into local notification requests and cancels them
when they no longer apply. Holds no per-note state: everything is keyed
by the note id through the identifier scheme, so cancellation never has
to ask the notification center what is pending.

Failures from the notification center are logged and dropped. A note
mutation is never rolled back because a reminder could not be scheduled.

Usage:
    scheduler = NotificationScheduler(center)
    scheduler.schedule_high_risk_reminder(note)
    scheduler.schedule_due_date_reminders(note)
    scheduler.cancel_all(note)
"""

from collections.abc import Callable
from datetime import datetime

from modules.remind.core.utils import utc_now
from modules.remind.models.note import Note
from modules.remind.notifications.center import (
    DUE_REMINDER_CATEGORY,
    CalendarTrigger,
    InterruptionLevel,
    NotificationCenter,
    NotificationRequest,
    NotificationSound,
    TimeIntervalTrigger,
)
from modules.remind.notifications.identifiers import (
    DUE_LEAD_INTERVALS,
    due_identifier,
    high_risk_identifier,
    identifiers_for,
    snooze_identifier,
)
from modules.remind.services.base import BaseService

DEFAULT_HIGH_RISK_INTERVAL_SECONDS = 3600

HIGH_RISK_TITLE = "⚠️ High Priority Reminder"
DUE_SOON_TITLE = "Reminder Due Soon"
SNOOZE_ENDED_TITLE = "Reminder Snooze Ended"


class NotificationScheduler(BaseService):
    """
    Schedules and cancels reminders for notes.

    Three kinds of reminder exist per note:
    - a recurring reminder while a high-risk note is outstanding
    - one-shot reminders at fixed lead times before the due date
    - a single wake-up alert when a snooze ends
    """

    log_source = "scheduler"

    def __init__(
        self,
        center: NotificationCenter,
        clock: Callable[[], datetime] = utc_now,
        high_risk_interval_seconds: int = DEFAULT_HIGH_RISK_INTERVAL_SECONDS,
    ) -> None:
        super().__init__()
        self.center = center
        self._clock = clock
        self.high_risk_interval_seconds = high_risk_interval_seconds

    def schedule_high_risk_reminder(self, note: Note) -> str | None:
        """
        Register the recurring reminder for a high-risk note.

        Returns:
            The identifier scheduled, or None if the note is not high risk
        """
        if not note.risk.is_high_risk:
            return None

        request = NotificationRequest(
            identifier=high_risk_identifier(note.id),
            title=HIGH_RISK_TITLE,
            body=note.text,
            trigger=TimeIntervalTrigger(self.high_risk_interval_seconds, repeats=True),
            category=DUE_REMINDER_CATEGORY,
            interruption_level=InterruptionLevel.TIME_SENSITIVE,
            sound=NotificationSound.CRITICAL,
        )
        return request.identifier if self._add(request) else None

    def schedule_due_date_reminders(self, note: Note) -> list[str]:
        """
        Register one reminder per lead interval before the due date.

        Lead times that are already in the past are skipped.

        Returns:
            Identifiers scheduled, nearest lead time first
        """
        if note.due_date is None:
            return []

        now = self._clock()
        scheduled = []
        for tag, lead in DUE_LEAD_INTERVALS:
            fire_at = note.due_date - lead
            if fire_at <= now:
                continue

            request = NotificationRequest(
                identifier=due_identifier(tag, note.id),
                title=DUE_SOON_TITLE,
                body=f"{note.text} is due in {tag}.",
                trigger=CalendarTrigger(fire_at),
                category=DUE_REMINDER_CATEGORY,
                interruption_level=InterruptionLevel.TIME_SENSITIVE,
            )
            if self._add(request):
                scheduled.append(request.identifier)

        if not scheduled:
            self._log_debug("No due-date reminders in the future", note_id=note.id)
        return scheduled

    def schedule_snooze(self, note: Note) -> str | None:
        """Register the wake-up alert at the end of a snooze."""
        if note.snooze_until is None:
            return None

        request = NotificationRequest(
            identifier=snooze_identifier(note.id),
            title=SNOOZE_ENDED_TITLE,
            body=note.text,
            trigger=CalendarTrigger(note.snooze_until),
        )
        return request.identifier if self._add(request) else None

    def schedule_for(self, note: Note) -> list[str]:
        """Register every reminder that applies to the note's current status."""
        if note.is_snoozed:
            identifier = self.schedule_snooze(note)
            return [identifier] if identifier else []
        if not note.is_active:
            return []

        identifiers = []
        high_risk = self.schedule_high_risk_reminder(note)
        if high_risk:
            identifiers.append(high_risk)
        identifiers.extend(self.schedule_due_date_reminders(note))
        return identifiers

    def cancel_all(self, note: Note | str) -> list[str]:
        """
        Remove every pending reminder that could exist for the note.

        Args:
            note: The note or its id

        Returns:
            The identifiers passed to the notification center
        """
        note_id = note if isinstance(note, str) else note.id
        identifiers = identifiers_for(note_id)
        try:
            self.center.remove_pending(identifiers)
        except Exception as e:
            self._log_error(
                "Failed to cancel notifications",
                note_id=note_id,
                error=str(e),
            )
        return identifiers

    def _add(self, request: NotificationRequest) -> bool:
        try:
            self.center.add(request)
        except Exception as e:
            self._log_warning(
                "Failed to schedule notification",
                identifier=request.identifier,
                error=str(e),
            )
            return False

        self._log_debug(
            "Notification requested",
            identifier=request.identifier,
            repeats=request.repeats,
        )
        return True
