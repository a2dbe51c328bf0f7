"""Typed exception hierarchy for CLI-related errors."""

from textile2md.content_converter.errors import MigrationError


class CLIError(MigrationError):
    """Base exception for all CLI-related errors."""
    pass


class InputError(CLIError):
    """Raised when the document to convert cannot be read."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Cannot read {source}: {reason}")
        self.source = source
        self.reason = reason
