"""
Unit Test Fixtures.

Fixtures for unit tests - storage is in memory and the notification
center only records calls. Unit tests never touch the real filesystem
outside tmp_path and never deliver notifications.
"""

import pytest

from modules.remind.notifications.center import RecordingNotificationCenter
from modules.remind.repositories.preferences import InMemoryKeyValueStore
from modules.remind.services.note import NoteStore
from modules.remind.services.notifications import NotificationScheduler


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def center() -> RecordingNotificationCenter:
    """
    Notification center that records add/remove calls.

    Usage:
        def test_schedules(store, center):
            store.add_note("Pay rent", 5)
            assert center.added_identifiers == [...]
    """
    return RecordingNotificationCenter()


@pytest.fixture
def scheduler(center, clock) -> NotificationScheduler:
    """Scheduler wired to the recording center and fake clock."""
    return NotificationScheduler(center, clock=clock)


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store(storage, scheduler, clock) -> NoteStore:
    """Empty note store on in-memory storage."""
    return NoteStore(storage, scheduler, clock=clock)
