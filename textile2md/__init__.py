"""Textile to CommonMark+GFM migration tool."""

from .content_converter import TextileConverter, convert

__version__ = "0.1.0"

__all__ = ['TextileConverter', 'convert', '__version__']
