"""
Integration Test Fixtures.

Fixtures for integration tests - real JSON file storage and real
asyncio timers. Nothing is mocked.
"""

from pathlib import Path

import pytest

from modules.remind.repositories.preferences import JsonFileKeyValueStore


@pytest.fixture
def preferences_path(tmp_path) -> Path:
    """Location of a fresh preferences file."""
    return tmp_path / "data" / "preferences.json"


@pytest.fixture
def file_storage(preferences_path) -> JsonFileKeyValueStore:
    """JSON file storage under tmp_path."""
    return JsonFileKeyValueStore(preferences_path)
