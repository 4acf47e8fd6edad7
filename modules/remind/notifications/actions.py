"""
Notification Action Dispatcher.

Maps a user's response to a delivered notification back onto the note
store. Responses can arrive on any thread; they are always handed to
the store's event loop before anything is mutated.

Usage:
    dispatcher = NotificationActionDispatcher(store, loop)

    # From the notification backend's callback thread
    dispatcher.handle_action("high_risk_3f2c...", "COMPLETE_ACTION")
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum

from modules.remind.core.logging import get_logger, log_with_source
from modules.remind.core.utils import utc_now
from modules.remind.notifications.identifiers import note_id_from_identifier
from modules.remind.services.note import NoteStore

logger = get_logger(__name__)

DEFAULT_SNOOZE_DURATION = timedelta(minutes=15)


class NotificationAction(str, Enum):
    """What the user did with a delivered notification."""

    COMPLETE = "complete"
    SNOOZE = "snooze"
    DISMISS = "dismiss"
    DEFAULT = "default"


# Wire identifiers used by notification backends, mapped to actions
ACTION_ALIASES: dict[str, NotificationAction] = {
    "COMPLETE_ACTION": NotificationAction.COMPLETE,
    "SNOOZE_ACTION": NotificationAction.SNOOZE,
    "CANCEL_ACTION": NotificationAction.DISMISS,
    "com.apple.UNNotificationDismissActionIdentifier": NotificationAction.DISMISS,
    "com.apple.UNNotificationDefaultActionIdentifier": NotificationAction.DEFAULT,
}


def parse_action(tag: str | NotificationAction) -> NotificationAction | None:
    """Resolve a wire or short action tag. Unknown tags return None."""
    if isinstance(tag, NotificationAction):
        return tag
    if tag in ACTION_ALIASES:
        return ACTION_ALIASES[tag]
    try:
        return NotificationAction(tag.lower())
    except ValueError:
        return None


class NotificationActionDispatcher:
    """
    Routes notification actions to the note store.

    complete  -> NoteStore.complete_note
    snooze    -> NoteStore.snooze_note(now + snooze_duration)
    dismiss   -> nothing
    default   -> nothing (the notification was just opened)

    Unresolvable identifiers and unknown actions are dropped.
    """

    def __init__(
        self,
        store: NoteStore,
        loop: asyncio.AbstractEventLoop,
        snooze_duration: timedelta = DEFAULT_SNOOZE_DURATION,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.store = store
        self.loop = loop
        self.snooze_duration = snooze_duration
        self._clock = clock

    def handle_action(self, identifier: str, action: str | NotificationAction) -> bool:
        """
        Accept an action from any thread and queue it on the store's loop.

        Returns:
            True if the action was queued, False if it was dropped
        """
        note_id = note_id_from_identifier(identifier)
        parsed = parse_action(action)
        if note_id is None or parsed is None:
            log_with_source(
                logger,
                "notifications",
                "debug",
                "Notification action dropped",
                identifier=identifier,
                action=str(action),
            )
            return False

        self.loop.call_soon_threadsafe(self.apply, note_id, parsed)
        return True

    def apply(self, note_id: str, action: NotificationAction) -> None:
        """Apply an action to the store. Must run on the store's loop."""
        log_with_source(
            logger,
            "notifications",
            "info",
            "Notification action received",
            note_id=note_id,
            action=action.value,
        )

        if action is NotificationAction.COMPLETE:
            self.store.complete_note(note_id)
        elif action is NotificationAction.SNOOZE:
            self.store.snooze_note(note_id, self._clock() + self.snooze_duration)
