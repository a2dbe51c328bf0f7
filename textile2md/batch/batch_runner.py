"""File-system batch driver for Textile to Markdown migration.

This module provides the BatchRunner, which discovers Textile documents from
a BatchConfig, converts them in parallel and writes the Markdown next to the
sources or into an output tree. A document is either fully converted and
written, or reported as failed with its output left untouched.
"""

import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, List, Optional

from textile2md.content_converter.errors import MigrationError
from textile2md.content_converter.settings import ConverterSettings, SettingsLoader
from textile2md.content_converter.textile_converter import TextileConverter

from .errors import FilesystemError
from .models import BatchConfig, BatchSummary, Document, DocumentResult, SourceConfig

logger = logging.getLogger(__name__)


class BatchRunner:
    """Runs a batch migration described by a BatchConfig.

    Documents are converted concurrently with at most ``max_workers`` in
    flight, which also bounds the number of pandoc processes. With
    ``on_error: abort`` no new document is started after the first failure;
    documents already running are allowed to finish.

    Example:
        >>> config = ConfigLoader.load('migration.yaml')
        >>> summary = BatchRunner(config).run()
        >>> print(f"{summary.converted} converted, {len(summary.failed)} failed")
    """

    def __init__(
        self,
        config: BatchConfig,
        converter: Optional[TextileConverter] = None,
        settings: Optional[ConverterSettings] = None,
    ):
        """Initialize the runner.

        Args:
            config: Batch configuration
            converter: Conversion pipeline (default: pandoc-backed pipeline)
            settings: Converter settings (default: from the environment); a
                timeout set in the job overrides theirs
        """
        self.config = config
        if converter is None:
            if config.timeout is not None:
                settings = (settings or SettingsLoader().get_settings())._replace(
                    timeout=config.timeout or None
                )
            converter = TextileConverter(settings=settings)
        self.converter = converter

    def discover(self) -> List[Document]:
        """List all documents described by the configured sources.

        Returns:
            Documents in a stable order (per source, sorted by path)

        Raises:
            FilesystemError: If a source path does not exist
        """
        documents: List[Document] = []
        for source in self.config.sources:
            documents.extend(self._discover_source(source))
        logger.info(f"Discovered {len(documents)} document(s)")
        return documents

    def _discover_source(self, source: SourceConfig) -> List[Document]:
        root = Path(source.path)
        if root.is_file():
            return [Document(str(root), str(self._output_path(source, root, Path(root.name))))]
        if not root.is_dir():
            raise FilesystemError(source.path, 'discover', 'Source path not found')

        documents = []
        for path in sorted(root.glob(source.pattern)):
            if not path.is_file():
                continue
            documents.append(
                Document(str(path), str(self._output_path(source, path, path.relative_to(root))))
            )
        logger.debug(f"  {source.path}: {len(documents)} document(s) matching {source.pattern}")
        return documents

    @staticmethod
    def _output_path(source: SourceConfig, path: Path, relative: Path) -> Path:
        if source.output_dir:
            return Path(source.output_dir) / relative.with_suffix(source.output_suffix)
        return path.with_suffix(source.output_suffix)

    def run(
        self,
        documents: Optional[List[Document]] = None,
        on_result: Optional[Callable[[DocumentResult], None]] = None,
    ) -> BatchSummary:
        """Convert all documents.

        Args:
            documents: Documents to convert (default: discover())
            on_result: Called with each DocumentResult as it completes

        Returns:
            BatchSummary of the run
        """
        if documents is None:
            documents = self.discover()

        summary = BatchSummary()
        if not documents:
            return summary

        logger.info(
            f"Converting {len(documents)} document(s) with {self.config.max_workers} worker(s)"
        )

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {
                executor.submit(self._convert_document, document): document
                for document in documents
            }

            for future in as_completed(futures):
                if future.cancelled():
                    continue
                document = futures[future]

                try:
                    result = future.result()
                except MigrationError as e:
                    result = DocumentResult(document=document, success=False, error=str(e))
                    logger.error(f"  ✗ {document.source_path}: {e}")

                if result.success:
                    summary.converted += 1
                    if result.empty:
                        summary.empty += 1
                    logger.debug(f"  ✓ {document.source_path} -> {document.output_path}")
                else:
                    summary.failed.append(result)
                    if self.config.on_error == 'abort' and not summary.aborted:
                        summary.aborted = True
                        summary.not_started = sum(1 for f in futures if f.cancel())
                        logger.warning(
                            f"Aborting batch: {summary.not_started} document(s) not started"
                        )

                if on_result:
                    on_result(result)

        logger.info(
            f"Batch complete: {summary.converted} converted, "
            f"{len(summary.failed)} failed, {summary.not_started} not started"
        )
        return summary

    def _convert_document(self, document: Document) -> DocumentResult:
        """Read, convert and write one document.

        Raises:
            FilesystemError: If the source cannot be read or output written
            ConversionProcessError: If pandoc fails
        """
        try:
            with open(document.source_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(document.source_path, 'read', str(e))

        markdown = self.converter.convert(text)
        self._write_atomic(document.output_path, markdown)
        return DocumentResult(document=document, success=True, empty=not text)

    def _write_atomic(self, file_path: str, content: str) -> None:
        """Write a file via a temp file in the same directory and os.replace().

        Raises:
            FilesystemError: If the file cannot be written
        """
        directory = os.path.dirname(file_path) or '.'
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise FilesystemError(directory, 'create_directory', str(e))

        try:
            fd, temp_path = tempfile.mkstemp(
                dir=directory, prefix='.textile2md-', suffix='.tmp'
            )
        except OSError as e:
            raise FilesystemError(file_path, 'write', str(e))

        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(content)
            os.replace(temp_path, file_path)
        except OSError as e:
            try:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
            except OSError as cleanup_error:
                logger.warning(f"Failed to remove temp file {temp_path}: {cleanup_error}")
            raise FilesystemError(file_path, 'write', str(e))
