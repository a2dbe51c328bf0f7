"""Command-line interface for Textile to Markdown migration.

This package provides the `textile2md` CLI tool, which converts single
documents or runs batch migrations described by a YAML job file, with
progress indication and error handling.
"""

from .errors import CLIError, InputError
from .models import ExitCode, OnErrorOption

__all__ = [
    'CLIError',
    'InputError',
    'ExitCode',
    'OnErrorOption',
]
