"""Test helper modules for conversion testing.

This package provides utilities for unit and integration testing:
- fake_converter: Converter double that replaces the pandoc subprocess
"""

from .fake_converter import FakeConverter, pandoc_like

__all__ = [
    'FakeConverter',
    'pandoc_like',
]
