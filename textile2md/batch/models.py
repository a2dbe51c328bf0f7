"""Data models for the batch driver.

This module defines all data models used by the batch migration driver.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OnErrorPolicy = Literal['abort', 'skip']


@dataclass
class SourceConfig:
    """One set of Textile documents to migrate.

    Attributes:
        path: A Textile file, or a directory searched with ``pattern``
        pattern: Glob used when ``path`` is a directory
        output_dir: Where to write Markdown (None = next to each source file)
        output_suffix: Suffix replacing the source file's suffix
    """
    path: str
    pattern: str = "**/*.textile"
    output_dir: Optional[str] = None
    output_suffix: str = ".md"


@dataclass
class BatchConfig:
    """Configuration for a batch migration run.

    Attributes:
        sources: Document sets to migrate
        max_workers: Maximum documents (and pandoc processes) in flight
        timeout: Seconds per pandoc call, 0 = no limit (None = from converter settings)
        on_error: 'abort' stops at the first failure, 'skip' carries on
    """
    sources: List[SourceConfig]
    max_workers: int = 4
    timeout: Optional[float] = None
    on_error: OnErrorPolicy = 'abort'


@dataclass
class Document:
    """A single source file and where its Markdown goes."""
    source_path: str
    output_path: str


@dataclass
class DocumentResult:
    """Outcome of migrating one document.

    Attributes:
        document: The document that was processed
        success: True if the Markdown was written
        empty: True if the source had no content (written as empty file)
        error: Error message when success is False
    """
    document: Document
    success: bool
    empty: bool = False
    error: Optional[str] = None


@dataclass
class BatchSummary:
    """Summary of a batch run.

    Attributes:
        converted: Documents converted and written
        empty: Documents that were empty (included in converted)
        failed: Results of documents that failed
        not_started: Documents never processed because the run aborted
        aborted: True if the run stopped early
    """
    converted: int = 0
    empty: int = 0
    failed: List[DocumentResult] = field(default_factory=list)
    not_started: int = 0
    aborted: bool = False

    @property
    def success(self) -> bool:
        return not self.failed and not self.aborted
