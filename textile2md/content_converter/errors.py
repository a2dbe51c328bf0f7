"""Typed exception hierarchy for Textile to Markdown conversion errors.

This module defines all custom exceptions raised by the conversion core.
All exceptions inherit from MigrationError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class MigrationError(Exception):
    """Base exception for all textile2md errors.

    Use this to catch any application-level error from the migration tool.
    """
    pass


class ContentConverterError(MigrationError):
    """Base exception for all conversion core errors."""
    pass


class ConversionProcessError(ContentConverterError):
    """Raised when the external converter exits with a failure status.

    The diagnostic stream captured from the converter is kept verbatim in
    ``diagnostics`` so operators can see exactly what pandoc reported.
    """

    def __init__(self, diagnostics: str, returncode: Optional[int] = None):
        if returncode is not None:
            message = f"Pandoc failed (exit {returncode}): {diagnostics}"
        else:
            message = f"Pandoc failed: {diagnostics}"
        super().__init__(message)
        self.diagnostics = diagnostics
        self.returncode = returncode


class ConversionTimeoutError(ConversionProcessError):
    """Raised when the external converter does not finish within the timeout."""

    def __init__(self, timeout: float, diagnostics: str = ""):
        super().__init__(diagnostics or f"Pandoc conversion timed out (>{timeout}s)")
        self.timeout = timeout


class ConverterNotFoundError(ConversionProcessError):
    """Raised when the external converter executable cannot be found."""

    def __init__(self, executable: str):
        super().__init__(
            f"{executable} not found. Install: brew install pandoc (macOS) or "
            "apt-get install pandoc (Linux) or download from "
            "https://pandoc.org/installing.html"
        )
        self.executable = executable


class SentinelError(ContentConverterError):
    """Raised when a sentinel token could collide with real markup."""

    def __init__(self, name: str, token: str, reason: str):
        super().__init__(f"Invalid sentinel {name}={token!r}: {reason}")
        self.name = name
        self.token = token
        self.reason = reason


class SettingsError(ContentConverterError):
    """Raised when converter settings from the environment are invalid."""

    def __init__(self, variable: str, value: str, reason: str):
        super().__init__(f"Invalid setting {variable}={value!r}: {reason}")
        self.variable = variable
        self.value = value
        self.reason = reason
