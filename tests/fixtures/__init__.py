"""Test fixtures for conversion tests.

This module provides sample Textile documents used by unit, integration and
batch tests.
"""

from .sample_textile import (
    SAMPLE_TEXTILE_SIMPLE,
    SAMPLE_TEXTILE_AT_CODE,
    SAMPLE_TEXTILE_TABLE_MODIFIERS,
    SAMPLE_TEXTILE_CODE_BLOCK,
    SAMPLE_TEXTILE_LIST_WITH_PRE,
    SAMPLE_TEXTILE_WIKI_LINK,
    SAMPLE_TEXTILE_PATHOLOGICAL,
)

__all__ = [
    "SAMPLE_TEXTILE_SIMPLE",
    "SAMPLE_TEXTILE_AT_CODE",
    "SAMPLE_TEXTILE_TABLE_MODIFIERS",
    "SAMPLE_TEXTILE_CODE_BLOCK",
    "SAMPLE_TEXTILE_LIST_WITH_PRE",
    "SAMPLE_TEXTILE_WIKI_LINK",
    "SAMPLE_TEXTILE_PATHOLOGICAL",
]
