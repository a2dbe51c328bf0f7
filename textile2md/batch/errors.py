"""Typed exception hierarchy for batch migration errors.

This module defines all custom exceptions used by the batch driver.
All exceptions inherit from BatchError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from textile2md.content_converter.errors import MigrationError


class BatchError(MigrationError):
    """Base exception for all batch driver errors."""
    pass


class FilesystemError(BatchError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(BatchError):
    """Raised when job configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
