"""
Preferences Repository.

Durable key-value storage for application state. The note collection
and the display preference each live under their own fixed key.

Usage:
    from modules.remind.repositories.preferences import JsonFileKeyValueStore

    storage = JsonFileKeyValueStore(Path("data/preferences.json"))
    storage.set("remind.settings.showCountOnly", True)
    storage.get_bool("remind.settings.showCountOnly")
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from modules.remind.core.exceptions import StorageError
from modules.remind.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class KeyValueStore(ABC):
    """
    Base class for key-value stores.

    Subclasses implement _read_all and _write_all. Values must be
    JSON-compatible.
    """

    @abstractmethod
    def _read_all(self) -> dict[str, Any]:
        """Return the full key-value mapping."""
        ...

    @abstractmethod
    def _write_all(self, data: dict[str, Any]) -> None:
        """Replace the full key-value mapping."""
        ...

    def _read_for_update(self) -> dict[str, Any]:
        # An unreadable store is replaced by the next write.
        try:
            return self._read_all()
        except StorageError as e:
            log_with_source(logger, "store", "warning", "Discarding unreadable preferences", error=str(e))
            return {}

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the value stored under key.

        Raises:
            StorageError: If the backing store cannot be read
        """
        return self._read_all().get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean value. Non-boolean values read as the default."""
        value = self.get(key, default)
        return value if isinstance(value, bool) else default

    def set(self, key: str, value: Any) -> None:
        """
        Store value under key.

        Raises:
            StorageError: If the backing store cannot be written
        """
        data = self._read_for_update()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_for_update()
        if key in data:
            del data[key]
            self._write_all(data)


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Nothing survives a restart."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def _read_all(self) -> dict[str, Any]:
        return dict(self._data)

    def _write_all(self, data: dict[str, Any]) -> None:
        self._data = dict(data)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Store backed by a single JSON object file.

    Writes go to a temporary file in the same directory and are moved
    into place with os.replace, so a crash never leaves a half-written file.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Unexpected content in {self.path}")
        return data

    def _write_all(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

        log_with_source(
            logger,
            "store",
            "debug",
            "Preferences written",
            path=str(self.path),
            keys=len(data),
        )
