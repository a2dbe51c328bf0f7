"""Content conversion module for Textile → Markdown conversion.

This module provides the TextileConverter pipeline, which wraps pandoc
with the pre- and post-processing rewrites needed for clean
CommonMark+GFM output.
"""

from .converter_invoker import ConversionOutcome, Converter, PandocConverter
from .errors import (
    ContentConverterError,
    ConversionProcessError,
    ConversionTimeoutError,
    ConverterNotFoundError,
    MigrationError,
    SentinelError,
    SettingsError,
)
from .sentinels import DEFAULT_SENTINELS, FENCED_BLOCK_MARK, INLINE_CODE_MARK, SentinelRegistry
from .settings import ConverterSettings, SettingsLoader
from .textile_converter import TextileConverter, convert

__all__ = [
    'TextileConverter',
    'convert',
    'Converter',
    'ConversionOutcome',
    'PandocConverter',
    'ConverterSettings',
    'SettingsLoader',
    'SentinelRegistry',
    'DEFAULT_SENTINELS',
    'INLINE_CODE_MARK',
    'FENCED_BLOCK_MARK',
    'MigrationError',
    'ContentConverterError',
    'ConversionProcessError',
    'ConversionTimeoutError',
    'ConverterNotFoundError',
    'SentinelError',
    'SettingsError',
]
