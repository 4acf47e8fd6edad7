"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
None of these are fatal: callers log them and keep running.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class StorageError(ApplicationError):
    """Raised when the key-value store cannot read or write state."""

    def __init__(self, message: str = "Storage error") -> None:
        super().__init__(message, code="SYS_STORAGE_ERROR")


class NotificationError(ApplicationError):
    """Raised when the notification center rejects a request."""

    def __init__(self, message: str = "Notification error") -> None:
        super().__init__(message, code="SYS_NOTIFICATION_ERROR")


class ConfigurationError(ApplicationError):
    """Raised when configuration files are missing or invalid."""

    def __init__(self, message: str = "Invalid configuration") -> None:
        super().__init__(message, code="SYS_CONFIGURATION_ERROR")
