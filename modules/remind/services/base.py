"""
Base Service.

Base class for services providing common logging patterns.
Services own business rules and talk to their collaborators
(storage, notification center) through injected instances.

Usage:
    from modules.remind.services.base import BaseService

    class ArchiveService(BaseService):
        log_source = "store"

        def __init__(self, storage: KeyValueStore) -> None:
            super().__init__()
            self.storage = storage
"""

from typing import Any

from modules.remind.core.logging import get_logger, log_with_source


class BaseService:
    """
    Base class for all services.

    Provides:
    - A logger named after the subclass module
    - Structured logging helpers that tag records with the service
      name and its log source
    """

    log_source: str = "internal"

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _log(self, level: str, message: str, **context: Any) -> None:
        log_with_source(
            self._logger,
            self.log_source,
            level,
            message,
            service=self.__class__.__name__,
            **context,
        )

    def _log_operation(self, operation: str, **context: Any) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._log("info", operation, **context)

    def _log_debug(self, message: str, **context: Any) -> None:
        """Log debug information."""
        self._log("debug", message, **context)

    def _log_warning(self, message: str, **context: Any) -> None:
        """Log a recoverable failure."""
        self._log("warning", message, **context)

    def _log_error(self, message: str, **context: Any) -> None:
        """Log a failure the service absorbed."""
        self._log("error", message, **context)
