"""Invocation of the external Textile to Markdown converter (pandoc).

The converter is modelled as a small capability, ``run(text)``, so the
pipeline can be exercised with a test double instead of a real subprocess.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

from .errors import ConversionProcessError, ConversionTimeoutError, ConverterNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ConversionOutcome:
    """Result of one converter run.

    Attributes:
        markdown: Text written to standard output
        diagnostics: Text written to standard error
        success: True if the converter exited with status 0
        returncode: Raw exit status (None if unknown)
    """
    markdown: str
    diagnostics: str = ""
    success: bool = True
    returncode: Optional[int] = 0


class Converter(Protocol):
    """Anything that can turn normalized Textile into candidate Markdown."""

    def run(self, text: str) -> ConversionOutcome:
        ...


class PandocConverter:
    """Runs pandoc as a subprocess, one process per document.

    The pandoc arguments keep line wrapping as written (--wrap=preserve),
    read Textile and write a GitHub-flavored Markdown variant.

    Example:
        >>> converter = PandocConverter(timeout=30)
        >>> outcome = converter.run("h1. Title")
        >>> outcome.markdown
        'Title\\n=====\\n'
    """

    def __init__(
        self,
        pandoc_path: str = "pandoc",
        target_format: str = "markdown_github",
        timeout: Optional[float] = None,
    ):
        """Initialize PandocConverter and verify pandoc is available.

        Args:
            pandoc_path: Executable name or path of pandoc
            target_format: Pandoc writer for the output
            timeout: Seconds before a run is abandoned (None = no limit)

        Raises:
            ConverterNotFoundError: If pandoc is not found on system PATH
        """
        self.pandoc_path = pandoc_path
        self.target_format = target_format
        self.timeout = timeout

        if not self._pandoc_installed():
            raise ConverterNotFoundError(pandoc_path)

    @property
    def command(self) -> List[str]:
        # TODO: switch the default to 'gfm' once markdown_github is removed from pandoc
        return [self.pandoc_path, "--wrap=preserve", "-f", "textile", "-t", self.target_format]

    def run(self, text: str) -> ConversionOutcome:
        """Convert text with pandoc.

        Args:
            text: Normalized Textile, fed to pandoc on stdin

        Returns:
            ConversionOutcome with stdout, stderr and exit status

        Raises:
            ConversionTimeoutError: If pandoc runs longer than the timeout
            ConverterNotFoundError: If the pandoc executable disappeared
            ConversionProcessError: If pandoc cannot be started or its output
                cannot be decoded
        """
        logger.debug(f"Running {' '.join(self.command)} on {len(text)} chars")
        try:
            result = subprocess.run(
                self.command,
                input=text,
                text=True,
                encoding="utf-8",
                capture_output=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Pandoc timed out after {self.timeout}s")
            raise ConversionTimeoutError(self.timeout)
        except FileNotFoundError:
            raise ConverterNotFoundError(self.pandoc_path)
        except OSError as e:
            raise ConversionProcessError(f"Cannot run {self.pandoc_path}: {e}")
        except UnicodeError as e:
            raise ConversionProcessError(f"Pandoc output is not valid UTF-8: {e}")

        logger.debug(f"Pandoc exited with {result.returncode}")
        return ConversionOutcome(
            markdown=result.stdout,
            diagnostics=result.stderr,
            success=result.returncode == 0,
            returncode=result.returncode,
        )

    def _pandoc_installed(self) -> bool:
        """Check if pandoc is installed on system PATH.

        Returns:
            True if pandoc is available, False otherwise
        """
        try:
            result = subprocess.run(
                ["which", self.pandoc_path],
                capture_output=True,
                timeout=5
            )
            return result.returncode == 0
        except (subprocess.TimeoutExpired, FileNotFoundError):
            return False


def invoke_converter(converter: Converter, text: str) -> str:
    """Run the converter and fail fast on a failure status.

    Args:
        converter: Converter to run
        text: Normalized Textile

    Returns:
        Candidate Markdown

    Raises:
        ConversionProcessError: If the converter reports failure
    """
    outcome = converter.run(text)
    if not outcome.success:
        logger.error(f"Converter failed (exit {outcome.returncode}): {outcome.diagnostics}")
        raise ConversionProcessError(outcome.diagnostics, outcome.returncode)
    if outcome.diagnostics:
        logger.warning(f"Converter reported: {outcome.diagnostics.strip()}")
    return outcome.markdown
