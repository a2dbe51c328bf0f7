"""Main CLI entry point for the textile2md command.

This module provides the Typer application that serves as the entry point
for the textile2md command-line tool. It uses options on the main command
rather than subcommands: a FILE argument converts one document, --config
runs a batch job.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from textile2md import __version__
from textile2md.batch.batch_runner import BatchRunner
from textile2md.batch.config_loader import ConfigLoader
from textile2md.batch.errors import ConfigError, FilesystemError
from textile2md.cli.errors import InputError
from textile2md.cli.models import ExitCode, OnErrorOption
from textile2md.cli.output import OutputHandler
from textile2md.content_converter.errors import (
    ConversionProcessError,
    SentinelError,
    SettingsError,
)
from textile2md.content_converter.settings import ConverterSettings, SettingsLoader
from textile2md.content_converter.textile_converter import TextileConverter

app = typer.Typer(
    name="textile2md",
    help="""Convert Textile markup to CommonMark+GFM Markdown using pandoc.

QUICK START:
  textile2md page.textile                  # Convert one file to stdout
  textile2md page.textile -o page.md       # Convert one file to a file
  cat page.textile | textile2md -          # Convert stdin
  textile2md --config migration.yaml       # Run a batch migration""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

# Module logger
logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """textile2md <file>                        # Convert one file to stdout
textile2md <file> -o <output.md>         # Convert one file to a file
textile2md -                             # Convert stdin
textile2md --config <job.yaml>           # Run a batch migration
textile2md --config <job.yaml> --dry-run # Preview a batch migration
--help                                   # Show all options"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'textile2md' namespace logger to avoid affecting
    third-party libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("textile2md")
    app_logger.setLevel(level)
    app_logger.handlers.clear()

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"textile2md_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _stdin_is_interactive() -> bool:
    return sys.stdin.isatty()


def _load_settings(timeout: Optional[float]) -> ConverterSettings:
    """Load converter settings from the environment, applying --timeout."""
    settings = SettingsLoader().get_settings()
    if timeout is not None:
        settings = settings._replace(timeout=timeout or None)
    return settings


def _read_input(file: Optional[str]) -> str:
    """Read the document from a file, or from stdin for None or '-'.

    Raises:
        InputError: If the file cannot be read
    """
    if file is None or file == "-":
        return sys.stdin.read()
    try:
        with open(file, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(file, str(e))


def _write_output(output_path: str, markdown: str) -> None:
    """Write Markdown to a file.

    Raises:
        FilesystemError: If the file cannot be written
    """
    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(markdown)
    except OSError as e:
        raise FilesystemError(output_path, 'write', str(e))


def _run_single(
    file: Optional[str],
    output_path: Optional[str],
    timeout: Optional[float],
    output: OutputHandler,
) -> None:
    """Convert one document from a file or stdin.

    Args:
        file: Source file, '-' or None for stdin
        output_path: Destination file (None = stdout)
        timeout: Seconds per pandoc call, 0 = no limit (None = from settings)
        output: Output handler for status messages
    """
    source = "stdin" if file is None or file == "-" else file
    text = _read_input(file)
    if not text:
        output.warning(f"{source} is empty")
    converter = TextileConverter(settings=_load_settings(timeout))
    markdown = converter.convert(text)

    if output_path:
        _write_output(output_path, markdown)
        output.success(f"Converted {source} → {output_path}")
    else:
        typer.echo(markdown, nl=False)


def _run_batch(
    config_path: str,
    jobs: Optional[int],
    timeout: Optional[float],
    on_error: Optional[OnErrorOption],
    dry_run: bool,
    output: OutputHandler,
) -> ExitCode:
    """Run a batch migration from a job file.

    Command-line options override the values from the job file.

    Returns:
        ExitCode.SUCCESS if every document converted, CONVERSION_ERROR otherwise
    """
    output.info(f"Loading job configuration from {config_path}")
    config = ConfigLoader.load(config_path)

    if jobs is not None:
        config.max_workers = jobs
    if timeout is not None:
        config.timeout = timeout
    if on_error is not None:
        config.on_error = on_error.value

    settings = _load_settings(None)
    runner = BatchRunner(config, settings=settings)
    effective_timeout = settings.timeout if config.timeout is None else config.timeout
    output.debug(
        f"pandoc: {settings.pandoc_path} -t {settings.target_format}, "
        f"timeout: {effective_timeout or 'none'}, on_error: {config.on_error}"
    )
    documents = runner.discover()

    if dry_run:
        output.print_dryrun_summary(documents)
        return ExitCode.SUCCESS

    output.info(f"Converting {len(documents)} document(s) with {config.max_workers} worker(s)")
    with output.progress_bar(len(documents)) as advance:
        summary = runner.run(documents, on_result=lambda result: advance())

    output.print_batch_summary(summary)
    return ExitCode.SUCCESS if summary.success else ExitCode.CONVERSION_ERROR


@app.command()
def main_command(
    file: Optional[str] = typer.Argument(
        None,
        help="Textile file to convert ('-' for stdin)",
    ),
    output_path: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write Markdown to this file instead of stdout",
        metavar="PATH",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Batch job file (YAML) listing the documents to migrate",
        metavar="PATH",
    ),
    jobs: Optional[int] = typer.Option(
        None,
        "--jobs",
        "-j",
        min=1,
        help="With --config: documents converted in parallel (overrides max_workers)",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        min=0,
        help="Seconds allowed per pandoc call, 0 disables the limit",
    ),
    on_error: Optional[OnErrorOption] = typer.Option(
        None,
        "--on-error",
        help="With --config: abort at the first failed document or skip it",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="With --config: list the documents without converting them",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Convert Textile markup to CommonMark+GFM Markdown using pandoc.

    \b
    QUICK START:
      textile2md page.textile                  # Convert one file to stdout
      textile2md page.textile -o page.md       # Convert one file to a file
      cat page.textile | textile2md -          # Convert stdin
      textile2md --config migration.yaml       # Run a batch migration

    \b
    ENVIRONMENT (also read from .env):
      TEXTILE2MD_PANDOC_PATH     pandoc executable (default: pandoc)
      TEXTILE2MD_TARGET_FORMAT   pandoc writer (default: markdown_github)
      TEXTILE2MD_TIMEOUT         seconds per pandoc call (default: 30)
    """
    if version:
        typer.echo(f"textile2md version {__version__}")
        raise typer.Exit()

    if config and (file is not None or output_path is not None):
        typer.echo("Error: FILE and --output cannot be combined with --config", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not config and (jobs is not None or on_error is not None or dry_run):
        typer.echo("Error: --jobs, --on-error and --dry-run require --config", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not config and file is None and _stdin_is_interactive():
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        if config:
            exit_code = _run_batch(config, jobs, timeout, on_error, dry_run, output)
        else:
            _run_single(file, output_path, timeout, output)
            exit_code = ExitCode.SUCCESS

    except (ConfigError, SettingsError, SentinelError) as e:
        logger.error(f"Invalid configuration: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.CONFIG_ERROR)

    except ConversionProcessError as e:
        logger.error(f"Conversion failed: {e}")
        output.error(str(e))
        raise typer.Exit(ExitCode.CONVERSION_ERROR)

    except (InputError, FilesystemError) as e:
        logger.error(str(e))
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m textile2md.cli.main
if __name__ == "__main__":
    main()
