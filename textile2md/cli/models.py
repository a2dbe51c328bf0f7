"""Data models for CLI operations."""

from enum import Enum, IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (bad input, unreadable files)
    - CONVERSION_ERROR (2): Pandoc failed, timed out or is missing, or
      documents in a batch failed
    - CONFIG_ERROR (3): Invalid job file or converter settings

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONVERSION_ERROR = 2
    CONFIG_ERROR = 3


class OnErrorOption(str, Enum):
    """What a batch run does when a document fails."""
    ABORT = "abort"
    SKIP = "skip"
