"""Textile to CommonMark+GFM conversion pipeline.

pandoc does the bulk translation, surrounded by regex rewrites that work
around the known mismatches between Textile, pandoc and the target Markdown
renderer.

    raw Textile -> pre_process -> pandoc -> post_process -> Markdown
"""

import logging
import threading
from typing import Dict, Mapping, Optional

from .converter_invoker import Converter, PandocConverter, invoke_converter
from .post_processor import post_process
from .pre_processor import pre_process
from .sentinels import DEFAULT_SENTINELS, SentinelRegistry
from .settings import ConverterSettings, SettingsLoader

logger = logging.getLogger(__name__)


class TextileConverter:
    """Converts Textile text to Markdown, one document at a time.

    The converter holds no per-document state, so a single instance can be
    shared between threads. The default PandocConverter is only created when
    the first non-empty document arrives.

    Example:
        >>> converter = TextileConverter()
        >>> converter.convert("Run @git@github.com@ first")
        'Run `git@github.com` first\\n'
    """

    def __init__(
        self,
        converter: Optional[Converter] = None,
        sentinels: SentinelRegistry = DEFAULT_SENTINELS,
        settings: Optional[ConverterSettings] = None,
    ):
        """Initialize the pipeline.

        Args:
            converter: Converter to use (default: PandocConverter from settings)
            sentinels: Sentinel tokens used to shield content
            settings: Settings for the default PandocConverter (default: read
                from TEXTILE2MD_* environment variables when first needed)
        """
        self._converter = converter
        self.sentinels = sentinels
        self.settings = settings
        self._lock = threading.Lock()

    def _get_converter(self) -> Converter:
        """Get or create the external converter (lazy initialization)."""
        with self._lock:
            if self._converter is None:
                if self.settings is None:
                    self.settings = SettingsLoader().get_settings()
                self._converter = PandocConverter(
                    pandoc_path=self.settings.pandoc_path,
                    target_format=self.settings.target_format,
                    timeout=self.settings.timeout,
                )
            return self._converter

    def convert(self, text: Optional[str]) -> str:
        """Convert one Textile document to Markdown.

        Args:
            text: Textile text; None or empty is allowed

        Returns:
            Markdown text ("" for empty input, without running the converter)

        Raises:
            ConversionProcessError: If the external converter fails
            SettingsError: If the environment holds invalid converter settings
        """
        if not text:
            return ""

        logger.debug(f"Converting {len(text)} chars of Textile")
        normalized = pre_process(text, self.sentinels)
        markdown = invoke_converter(self._get_converter(), normalized)
        return post_process(markdown, self.sentinels)

    def convert_values(self, values: Mapping[str, Optional[str]]) -> Dict[str, str]:
        """Convert every value of a mapping, keeping the keys.

        Useful for settings stored per language, e.g. {"en": ..., "de": ...}.
        """
        return {key: self.convert(value) for key, value in values.items()}


_default_pipeline: Optional[TextileConverter] = None
_default_pipeline_lock = threading.Lock()


def _get_default_pipeline() -> TextileConverter:
    """Shared pandoc-backed pipeline, so pandoc is located only once."""
    global _default_pipeline
    with _default_pipeline_lock:
        if _default_pipeline is None:
            _default_pipeline = TextileConverter()
        return _default_pipeline


def convert(text: Optional[str], converter: Optional[Converter] = None) -> str:
    """Convert Textile text to Markdown.

    Without a converter, every call goes through one shared pipeline
    configured from the environment.

    Args:
        text: Textile text; None or empty is allowed
        converter: Converter to use (default: pandoc from settings)

    Returns:
        Markdown text
    """
    if converter is not None:
        return TextileConverter(converter=converter).convert(text)
    return _get_default_pipeline().convert(text)
