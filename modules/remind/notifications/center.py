"""
Notification Center Interface.

Defines the contract between the note store's scheduler and whatever
delivers local notifications. The scheduler interacts with delivery
exclusively through NotificationCenter.add and remove_pending.

Implementations:
    LoopNotificationCenter      - fires requests from asyncio loop timers
    RecordingNotificationCenter - records calls, delivers nothing
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from modules.remind.core.logging import get_logger, log_with_source
from modules.remind.core.utils import utc_now

logger = get_logger(__name__)

DUE_REMINDER_CATEGORY = "DUE_REMINDER"


class InterruptionLevel(str, Enum):
    """How insistently a notification is presented."""

    ACTIVE = "active"
    TIME_SENSITIVE = "time_sensitive"


class NotificationSound(str, Enum):
    DEFAULT = "default"
    CRITICAL = "critical"


@dataclass(frozen=True)
class TimeIntervalTrigger:
    """Fire after a fixed number of seconds, optionally repeating."""

    seconds: float
    repeats: bool = False

    def __post_init__(self) -> None:
        if self.seconds <= 0:
            raise ValueError("Trigger interval must be positive")

    def delay(self, now: datetime) -> float:
        return self.seconds


@dataclass(frozen=True)
class CalendarTrigger:
    """Fire once at an absolute UTC time."""

    fire_at: datetime
    repeats: bool = False

    def delay(self, now: datetime) -> float:
        return max((self.fire_at - now).total_seconds(), 0.0)


Trigger = TimeIntervalTrigger | CalendarTrigger


@dataclass(frozen=True)
class NotificationActionSpec:
    """A button offered on a delivered notification."""

    identifier: str
    title: str
    destructive: bool = False


# Actions offered for every notification in DUE_REMINDER_CATEGORY
CATEGORY_ACTIONS: dict[str, tuple[NotificationActionSpec, ...]] = {
    DUE_REMINDER_CATEGORY: (
        NotificationActionSpec("COMPLETE_ACTION", "Complete"),
        NotificationActionSpec("SNOOZE_ACTION", "Snooze 15m"),
        NotificationActionSpec("CANCEL_ACTION", "Dismiss", destructive=True),
    ),
}


@dataclass(frozen=True)
class NotificationRequest:
    """A local notification to deliver when its trigger fires."""

    identifier: str
    title: str
    body: str
    trigger: Trigger
    category: str | None = None
    interruption_level: InterruptionLevel = InterruptionLevel.ACTIVE
    sound: NotificationSound = NotificationSound.DEFAULT

    @property
    def repeats(self) -> bool:
        return self.trigger.repeats

    @property
    def actions(self) -> tuple[NotificationActionSpec, ...]:
        """Buttons to offer with this notification, from its category."""
        if self.category is None:
            return ()
        return CATEGORY_ACTIONS.get(self.category, ())


class NotificationCenter(ABC):
    """
    Base class for local notification backends.

    Adding a request whose identifier is already pending replaces the
    pending request. Removing unknown identifiers is not an error.
    """

    @abstractmethod
    def add(self, request: NotificationRequest) -> None:
        """Register a request for later delivery."""
        ...

    @abstractmethod
    def remove_pending(self, identifiers: list[str]) -> None:
        """Drop pending requests with these identifiers."""
        ...


class LoopNotificationCenter(NotificationCenter):
    """
    Delivers notifications from asyncio event loop timers.

    Must be called from the loop's thread. Repeating requests re-arm
    after each delivery until removed.

    Usage:
        center = LoopNotificationCenter(loop, deliver=show_banner)
        center.add(request)
        center.remove_pending([request.identifier])
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        deliver: Callable[[NotificationRequest], None],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._loop = loop
        self._deliver = deliver
        self._clock = clock
        self._pending: dict[str, tuple[NotificationRequest, asyncio.TimerHandle]] = {}

    def add(self, request: NotificationRequest) -> None:
        self._cancel(request.identifier)
        self._arm(request)
        log_with_source(
            logger,
            "notifications",
            "debug",
            "Notification scheduled",
            identifier=request.identifier,
            repeats=request.repeats,
        )

    def remove_pending(self, identifiers: list[str]) -> None:
        removed = [identifier for identifier in identifiers if self._cancel(identifier)]
        if removed:
            log_with_source(
                logger,
                "notifications",
                "debug",
                "Pending notifications removed",
                identifiers=removed,
            )

    def pending_identifiers(self) -> list[str]:
        return list(self._pending)

    def get_pending(self, identifier: str) -> NotificationRequest | None:
        entry = self._pending.get(identifier)
        return entry[0] if entry else None

    def _arm(self, request: NotificationRequest) -> None:
        delay = request.trigger.delay(self._clock())
        handle = self._loop.call_later(delay, self._fire, request)
        self._pending[request.identifier] = (request, handle)

    def _cancel(self, identifier: str) -> bool:
        entry = self._pending.pop(identifier, None)
        if entry is None:
            return False
        entry[1].cancel()
        return True

    def _fire(self, request: NotificationRequest) -> None:
        if request.repeats:
            self._arm(request)
        else:
            self._pending.pop(request.identifier, None)

        try:
            self._deliver(request)
        except Exception as e:
            log_with_source(
                logger,
                "notifications",
                "error",
                "Notification delivery failed",
                identifier=request.identifier,
                error=str(e),
            )


@dataclass
class RecordingNotificationCenter(NotificationCenter):
    """Keeps every call for inspection. Nothing is ever delivered."""

    added: list[NotificationRequest] = field(default_factory=list)
    removed: list[list[str]] = field(default_factory=list)

    def add(self, request: NotificationRequest) -> None:
        self.added.append(request)

    def remove_pending(self, identifiers: list[str]) -> None:
        self.removed.append(list(identifiers))

    @property
    def added_identifiers(self) -> list[str]:
        return [request.identifier for request in self.added]

    def clear(self) -> None:
        self.added.clear()
        self.removed.clear()
