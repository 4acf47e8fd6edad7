"""
Note Store.

Business logic layer for reminder notes. The store is the single writer
of the note collection: it enforces the active-note cap, applies status
transitions, persists after every mutation and then asks the
notification scheduler to bring pending reminders in line.

All methods must run on one thread (the application's event loop).
The store has no locking.
"""

from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError

from modules.remind.core.exceptions import StorageError
from modules.remind.core.utils import to_naive_utc, utc_now
from modules.remind.models.note import Note, RiskLevel
from modules.remind.repositories.preferences import KeyValueStore
from modules.remind.schemas.note import dump_notes, load_notes
from modules.remind.services.base import BaseService
from modules.remind.services.notifications import NotificationScheduler

NOTES_KEY = "remind.notes.v1"
SHOW_COUNT_ONLY_KEY = "remind.settings.showCountOnly"

MAX_ACTIVE_NOTES = 5


class NoteStore(BaseService):
    """
    Owns the canonical note collection.

    Notes are kept in insertion order. Priority order is only a derived
    view (active_notes). Completed and snoozed notes stay in the
    collection until deleted.

    Unknown note ids are ignored by every mutating operation.
    """

    log_source = "store"

    def __init__(
        self,
        storage: KeyValueStore,
        scheduler: NotificationScheduler,
        clock: Callable[[], datetime] = utc_now,
        max_active: int = MAX_ACTIVE_NOTES,
    ) -> None:
        super().__init__()
        self.storage = storage
        self.scheduler = scheduler
        self._clock = clock
        self.max_active = max_active
        self._notes: list[Note] = self._load_notes()
        self._show_count_only = self._load_show_count_only()

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def notes(self) -> tuple[Note, ...]:
        """All notes in insertion order."""
        return tuple(self._notes)

    @property
    def active_notes(self) -> list[Note]:
        """Active notes, highest risk first. Equal risks keep insertion order."""
        active = [note for note in self._notes if note.is_active]
        return sorted(active, key=lambda note: note.risk, reverse=True)

    @property
    def highest_risk_note(self) -> Note | None:
        active = self.active_notes
        return active[0] if active else None

    @property
    def active_count(self) -> int:
        return sum(1 for note in self._notes if note.is_active)

    @property
    def can_add_note(self) -> bool:
        return self.active_count < self.max_active

    @property
    def show_count_only(self) -> bool:
        return self._show_count_only

    def get_note(self, note_id: str) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_note(
        self,
        text: str,
        risk: RiskLevel | int,
        due_date: datetime | None = None,
    ) -> bool:
        """
        Add a new active note.

        Persists the collection, then schedules the high-risk reminder
        (risk >= 4) and due-date reminders (when a due date is given).

        Args:
            text: Display text, already validated as non-blank by the caller
            risk: Risk level 1-5
            due_date: Optional due date. Aware values are converted to naive UTC

        Returns:
            False without changing anything if the active cap is reached
        """
        if not self.can_add_note:
            self._log_operation(
                "Active note limit reached",
                active=self.active_count,
                limit=self.max_active,
            )
            return False

        note = Note(
            text=text,
            risk=RiskLevel(risk),
            created_at=self._clock(),
            due_date=to_naive_utc(due_date),
        )
        self._notes.append(note)
        self._log_operation("Note added", note_id=note.id, risk=int(note.risk))
        self.persist()

        self.scheduler.schedule_high_risk_reminder(note)
        self.scheduler.schedule_due_date_reminders(note)
        return True

    def update_note(
        self,
        note_id: str,
        text: str,
        risk: RiskLevel | int,
        due_date: datetime | None = None,
    ) -> None:
        """
        Replace the text, risk and due date of an existing note.

        There is no capacity check. After persisting, pending reminders
        are cancelled and rebuilt from the new values, so no alert fires
        with stale text. Only reminders valid for the note's status are
        rebuilt: a snoozed note gets its wake-up alert back, a completed
        note gets nothing.
        """
        note = self.get_note(note_id)
        if note is None:
            self._log_debug("Update ignored for unknown note", note_id=note_id)
            return

        note.text = text
        note.risk = RiskLevel(risk)
        note.due_date = to_naive_utc(due_date)
        self._log_operation("Note updated", note_id=note_id, risk=int(note.risk))
        self.persist()

        self.scheduler.cancel_all(note)
        self.scheduler.schedule_for(note)

    def complete_note(self, note_id: str) -> None:
        """
        Mark a note completed and cancel all of its reminders.

        Completing an already-completed note changes nothing, so the
        first completion time is kept.
        """
        note = self.get_note(note_id)
        if note is None:
            self._log_debug("Complete ignored for unknown note", note_id=note_id)
            return
        if note.is_completed:
            return

        note.complete(self._clock())
        self._log_operation("Note completed", note_id=note_id)
        self.persist()

        self.scheduler.cancel_all(note)

    def snooze_note(self, note_id: str, until: datetime) -> None:
        """
        Snooze a note until the given time.

        Existing reminders are cancelled and exactly one wake-up alert is
        scheduled for `until`.
        """
        note = self.get_note(note_id)
        if note is None:
            self._log_debug("Snooze ignored for unknown note", note_id=note_id)
            return

        until = to_naive_utc(until)
        note.snooze(until)
        self._log_operation("Note snoozed", note_id=note_id, until=until.isoformat())
        self.persist()

        self.scheduler.cancel_all(note)
        self.scheduler.schedule_snooze(note)

    def delete_note(self, note_id: str) -> None:
        """Cancel a note's reminders and remove it permanently."""
        note = self.get_note(note_id)
        if note is None:
            self._log_debug("Delete ignored for unknown note", note_id=note_id)
            return

        self.scheduler.cancel_all(note)
        self._notes = [n for n in self._notes if n.id != note_id]
        self._log_operation("Note deleted", note_id=note_id)
        self.persist()

    def refresh_snoozed_notes(self) -> list[Note]:
        """
        Return snoozed notes whose wake time has passed to the active list.

        Call this before showing the active list. Nothing else wakes
        snoozed notes. Persists only when at least one note woke.

        Returns:
            The notes that woke up
        """
        now = self._clock()
        woken = [note for note in self._notes if note.should_wake(now)]
        for note in woken:
            note.wake()

        if woken:
            self._log_operation(
                "Snoozed notes woke",
                note_ids=[note.id for note in woken],
            )
            self.persist()
        return woken

    def set_show_count_only(self, value: bool) -> None:
        """Set and persist the menu-bar display preference."""
        self._show_count_only = value
        try:
            self.storage.set(SHOW_COUNT_ONLY_KEY, value)
        except StorageError as e:
            self._log_error("Failed to save display preference", error=str(e))

    # =========================================================================
    # Persistence
    # =========================================================================

    def persist(self) -> bool:
        """
        Write the full note collection to storage.

        A failed write is logged and otherwise ignored: the in-memory
        collection stays authoritative until the next successful write.

        Returns:
            True if the write succeeded
        """
        try:
            self.storage.set(NOTES_KEY, dump_notes(self._notes))
        except StorageError as e:
            self._log_error("Failed to save notes", error=str(e), count=len(self._notes))
            return False
        return True

    def _load_notes(self) -> list[Note]:
        try:
            payload = self.storage.get(NOTES_KEY)
        except StorageError as e:
            self._log_warning("Stored notes unreadable, starting empty", error=str(e))
            return []

        if payload is None:
            return []

        try:
            notes = load_notes(payload)
        except ValidationError as e:
            self._log_warning(
                "Stored notes invalid, starting empty",
                errors=e.error_count(),
            )
            return []

        self._log_debug("Notes loaded", count=len(notes))
        return notes

    def _load_show_count_only(self) -> bool:
        try:
            return self.storage.get_bool(SHOW_COUNT_ONLY_KEY)
        except StorageError as e:
            self._log_warning("Display preference unreadable", error=str(e))
            return False
