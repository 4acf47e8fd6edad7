"""
Application Bootstrap.

Wires the note store, notification scheduler and action dispatcher
together. Every collaborator is passed in explicitly; nothing is looked
up from module-level singletons.

Usage:
    loop = asyncio.get_running_loop()
    app = create_app_from_config(loop, deliver=show_banner)

    app.store.add_note("Pay rent", RiskLevel.CRITICAL)
    app.open_list()
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from modules.remind.core.config import get_app_config, get_storage_path
from modules.remind.core.logging import get_logger, log_with_source
from modules.remind.core.utils import utc_now
from modules.remind.models.note import Note
from modules.remind.notifications.actions import (
    DEFAULT_SNOOZE_DURATION,
    NotificationActionDispatcher,
)
from modules.remind.notifications.center import (
    LoopNotificationCenter,
    NotificationCenter,
    NotificationRequest,
)
from modules.remind.repositories.preferences import JsonFileKeyValueStore, KeyValueStore
from modules.remind.services.note import MAX_ACTIVE_NOTES, NoteStore
from modules.remind.services.notifications import (
    DEFAULT_HIGH_RISK_INTERVAL_SECONDS,
    NotificationScheduler,
)
from modules.remind.services.status import StatusTitle, build_status_title

logger = get_logger(__name__)

LIST_SNOOZE_DURATION = timedelta(hours=1)


@dataclass
class RemindApp:
    """The running application's object graph."""

    store: NoteStore
    scheduler: NotificationScheduler
    dispatcher: NotificationActionDispatcher
    center: NotificationCenter
    list_snooze_duration: timedelta = LIST_SNOOZE_DURATION
    clock: Callable[[], datetime] = utc_now

    def open_list(self) -> list[Note]:
        """Wake due snoozed notes and return the active list for display."""
        self.store.refresh_snoozed_notes()
        return self.store.active_notes

    def snooze_from_list(self, note_id: str) -> None:
        """Snooze a note from the list using the list preset."""
        self.store.snooze_note(note_id, self.clock() + self.list_snooze_duration)

    def restore_reminders(self) -> list[str]:
        """
        Re-register reminders for every stored note.

        A process-local notification center starts empty, so reminders
        from a previous run exist only as note state.

        Returns:
            Identifiers scheduled
        """
        identifiers = []
        for note in self.store.notes:
            identifiers.extend(self.scheduler.schedule_for(note))
        log_with_source(logger, "scheduler", "info", "Reminders restored", count=len(identifiers))
        return identifiers

    def status_title(self) -> StatusTitle:
        return build_status_title(self.store.active_notes, self.store.show_count_only)


def create_app(
    loop: asyncio.AbstractEventLoop,
    storage: KeyValueStore,
    center: NotificationCenter,
    clock: Callable[[], datetime] = utc_now,
    max_active: int = MAX_ACTIVE_NOTES,
    high_risk_interval_seconds: int = DEFAULT_HIGH_RISK_INTERVAL_SECONDS,
    notification_snooze: timedelta = DEFAULT_SNOOZE_DURATION,
    list_snooze: timedelta = LIST_SNOOZE_DURATION,
) -> RemindApp:
    """
    Build the application from explicit collaborators.

    Args:
        loop: Event loop that owns the store
        storage: Key-value store for notes and preferences
        center: Notification backend
        clock: Source of the current naive UTC time
        max_active: Active note cap
        high_risk_interval_seconds: Repeat interval for high-risk reminders
        notification_snooze: Snooze length for the notification action
        list_snooze: Snooze length for the list action

    Returns:
        Wired RemindApp
    """
    scheduler = NotificationScheduler(
        center,
        clock=clock,
        high_risk_interval_seconds=high_risk_interval_seconds,
    )
    store = NoteStore(storage, scheduler, clock=clock, max_active=max_active)
    dispatcher = NotificationActionDispatcher(
        store,
        loop,
        snooze_duration=notification_snooze,
        clock=clock,
    )

    log_with_source(
        logger,
        "internal",
        "info",
        "Application wired",
        notes=len(store.notes),
        active=store.active_count,
    )
    return RemindApp(
        store=store,
        scheduler=scheduler,
        dispatcher=dispatcher,
        center=center,
        list_snooze_duration=list_snooze,
        clock=clock,
    )


def create_app_from_config(
    loop: asyncio.AbstractEventLoop,
    deliver: Callable[[NotificationRequest], None],
) -> RemindApp:
    """
    Build the application from config/settings/application.yaml.

    Notes persist to the configured JSON file and notifications are
    delivered from loop timers through `deliver`.
    """
    app_config = get_app_config().application

    return create_app(
        loop,
        storage=JsonFileKeyValueStore(get_storage_path()),
        center=LoopNotificationCenter(loop, deliver),
        max_active=app_config.notes.max_active,
        high_risk_interval_seconds=app_config.notifications.high_risk_interval_seconds,
        notification_snooze=timedelta(minutes=app_config.notifications.snooze_minutes),
        list_snooze=timedelta(minutes=app_config.notes.list_snooze_minutes),
    )
