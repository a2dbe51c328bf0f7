"""Converter settings loaded from environment variables.

Settings are read from the process environment, with a .env file loaded
through python-dotenv first, so a migration host can be configured without
touching the job file.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import SettingsError


class ConverterSettings(NamedTuple):
    """How to run the external converter.

    Attributes:
        pandoc_path: Executable name or path of pandoc
        target_format: Pandoc writer used for the Markdown output
        timeout: Seconds before a pandoc call is abandoned (None = no limit)
    """
    pandoc_path: str = "pandoc"
    target_format: str = "markdown_github"
    timeout: Optional[float] = 30.0


class SettingsLoader:
    """Loads and validates ConverterSettings from environment variables.

    Optional environment variables:
        TEXTILE2MD_PANDOC_PATH: pandoc executable (default: pandoc)
        TEXTILE2MD_TARGET_FORMAT: pandoc writer (default: markdown_github)
        TEXTILE2MD_TIMEOUT: seconds per conversion, 0 disables (default: 30)

    Example:
        >>> settings = SettingsLoader().get_settings()
        >>> print(settings.pandoc_path)
    """

    PANDOC_PATH_VAR = 'TEXTILE2MD_PANDOC_PATH'
    TARGET_FORMAT_VAR = 'TEXTILE2MD_TARGET_FORMAT'
    TIMEOUT_VAR = 'TEXTILE2MD_TIMEOUT'

    def __init__(self, load_env_file: bool = True):
        """Initialize the loader, reading a .env file unless told not to."""
        if load_env_file:
            load_dotenv()

    def get_settings(self) -> ConverterSettings:
        """Build settings from the current environment.

        Returns:
            ConverterSettings with defaults for unset variables

        Raises:
            SettingsError: If a variable is set to an invalid value
        """
        defaults = ConverterSettings()

        pandoc_path = os.getenv(self.PANDOC_PATH_VAR, defaults.pandoc_path).strip()
        if not pandoc_path:
            raise SettingsError(self.PANDOC_PATH_VAR, pandoc_path, "cannot be empty")

        target_format = os.getenv(self.TARGET_FORMAT_VAR, defaults.target_format).strip()
        if not target_format:
            raise SettingsError(self.TARGET_FORMAT_VAR, target_format, "cannot be empty")

        timeout = defaults.timeout
        raw_timeout = os.getenv(self.TIMEOUT_VAR)
        if raw_timeout is not None and raw_timeout.strip():
            timeout = parse_timeout(raw_timeout, self.TIMEOUT_VAR)

        return ConverterSettings(
            pandoc_path=pandoc_path,
            target_format=target_format,
            timeout=timeout,
        )


def parse_timeout(value, name: str = 'timeout') -> Optional[float]:
    """Parse a timeout in seconds; 0 means no timeout.

    Raises:
        SettingsError: If the value is not a non-negative number
    """
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise SettingsError(name, str(value), "must be a number of seconds")
    if seconds < 0:
        raise SettingsError(name, str(value), "must not be negative")
    return seconds or None
