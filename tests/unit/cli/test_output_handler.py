"""Unit tests for cli.output module."""

from unittest.mock import patch

from textile2md.batch.models import BatchSummary, Document, DocumentResult
from textile2md.cli.output import OutputHandler


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_default_verbosity_and_color(self):
        handler = OutputHandler()

        assert handler.verbosity == 0
        assert handler.console.no_color is False
        assert handler.console.stderr is True

    def test_init_no_color_true(self):
        """Initialize with no_color=True disables colors."""
        handler = OutputHandler(no_color=True)

        assert handler.console.no_color is True


class TestOutputHandlerMessages:
    """Test cases for message methods."""

    def test_success_and_error(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.success("Converted page")
            handler.error("Pandoc failed")

        assert "✓ Converted page" in capture.get()
        assert "✗ Pandoc failed" in capture.get()

    def test_markup_in_messages_is_printed_literally(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.error("Cannot read [bold]x[/bold].textile")

        assert "[bold]x[/bold].textile" in capture.get()

    def test_warning(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.warning("page.textile is empty")

        assert "⚠ page.textile is empty" in capture.get()

    def test_progress_bar_advances_task(self):
        handler = OutputHandler(no_color=True)

        with patch('textile2md.cli.output.Progress') as mock_progress_cls:
            progress = mock_progress_cls.return_value
            progress.add_task.return_value = 7

            with handler.progress_bar(3, description="Migrating") as advance:
                advance()
                advance()

        progress.add_task.assert_called_once_with("Migrating", total=3)
        assert progress.update.call_count == 2
        progress.update.assert_called_with(7, advance=1)

    def test_info_hidden_at_verbosity_0(self):
        handler = OutputHandler(verbosity=0)

        with handler.console.capture() as capture:
            handler.info("details")
            handler.debug("more details")

        assert capture.get() == ""

    def test_info_shown_at_verbosity_1(self):
        handler = OutputHandler(verbosity=1)

        with handler.console.capture() as capture:
            handler.info("details")
            handler.debug("more details")

        assert "details" in capture.get()
        assert "more details" not in capture.get()

    def test_debug_shown_at_verbosity_2(self):
        handler = OutputHandler(verbosity=2)

        with handler.console.capture() as capture:
            handler.debug("more details")

        assert "more details" in capture.get()


class TestSummaries:
    """Test cases for batch and dry-run summaries."""

    def test_batch_summary_success(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.print_batch_summary(BatchSummary(converted=3, empty=1))

        output = capture.get()
        assert "Converted: 3 document(s)" in output
        assert "Empty: 1 document(s)" in output
        assert "Migration completed successfully" in output

    def test_batch_summary_lists_failures(self):
        handler = OutputHandler(no_color=True)
        failed = DocumentResult(
            document=Document('wiki/Bad.textile', 'wiki/Bad.md'),
            success=False,
            error="Pandoc failed (exit 1): [error]",
        )

        with handler.console.capture() as capture:
            handler.print_batch_summary(BatchSummary(converted=1, failed=[failed]))

        output = capture.get()
        assert "Failed: 1 document(s)" in output
        assert "wiki/Bad.textile: Pandoc failed (exit 1): [error]" in output
        assert "Migration completed with failures" in output

    def test_batch_summary_aborted(self):
        handler = OutputHandler(no_color=True)
        failed = DocumentResult(Document('a.textile', 'a.md'), success=False, error="boom")

        with handler.console.capture() as capture:
            handler.print_batch_summary(BatchSummary(failed=[failed], not_started=4, aborted=True))

        output = capture.get()
        assert "Not started: 4 document(s)" in output
        assert "Migration aborted" in output

    def test_batch_summary_nothing_to_do(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.print_batch_summary(BatchSummary())

        assert "No documents to convert" in capture.get()

    def test_dryrun_summary(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.print_dryrun_summary([Document('wiki/A.textile', 'out/A.md')])

        output = capture.get()
        assert "Would convert (1 document(s))" in output
        assert "wiki/A.textile → out/A.md" in output

    def test_dryrun_summary_empty(self):
        handler = OutputHandler(no_color=True)

        with handler.console.capture() as capture:
            handler.print_dryrun_summary([])

        assert "No documents to convert" in capture.get()
