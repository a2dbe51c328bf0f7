"""Batch driver for migrating Textile documents on disk.

This package reads a YAML job description, discovers Textile files and runs
each through the conversion pipeline with bounded concurrency.
"""

from .batch_runner import BatchRunner
from .config_loader import ConfigLoader
from .errors import BatchError, ConfigError, FilesystemError
from .models import BatchConfig, BatchSummary, Document, DocumentResult, SourceConfig

__all__ = [
    'BatchRunner',
    'ConfigLoader',
    'BatchConfig',
    'SourceConfig',
    'Document',
    'DocumentResult',
    'BatchSummary',
    'BatchError',
    'ConfigError',
    'FilesystemError',
]
