"""Main CLI entry point for the telex-editor command.

This module provides the Typer application of the editor developer tool:
converting HTML to formats, normalizing HTML the way the editor does before
saving, listing the local page store and opening a stored page through the
editor load pipeline.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import DEFAULT_CONFIG_PATH, ConfigLoader, EditorConfig
from src.cli.errors import CLIError
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.show_command import ShowCommand
from src.content_converter.format_converter import FormatConverter
from src.content_converter.html_converter import HtmlConverter
from src.content_converter.normalizer import normalize_nodes
from src.telegraph_client.errors import StoreError
from src.telegraph_client.page_store import LocalPageStore

VERSION = "0.1.0"

app = typer.Typer(
    name="telex-editor",
    help="""Telegraph page editor tools.

EXAMPLES:
  telex-editor convert article.html     # HTML -> editor formats
  telex-editor normalize article.html   # HTML -> normalized HTML
  telex-editor pages                    # List stored pages
  telex-editor show 42                  # Load stored page 42""",
    add_completion=False,
    rich_markup_mode=None,
)

logger = logging.getLogger(__name__)


class CLIState:
    """Global options shared by all commands."""

    def __init__(self, verbosity: int, no_color: bool, config: EditorConfig):
        self.verbosity = verbosity
        self.no_color = no_color
        self.config = config
        self.output = OutputHandler(verbosity=verbosity, no_color=no_color)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

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
        log_file = log_path / f"telex-editor_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _read_input(state: CLIState, file: str) -> str:
    try:
        with open(file, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Cannot read {file}: {e}")
        state.output.error(f"Cannot read {file}: {e.strerror or e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"telex-editor version {VERSION}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    config_path: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the YAML configuration file",
        metavar="PATH",
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
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Telegraph page editor tools."""
    _configure_logging(verbosity, logdir)

    try:
        config = ConfigLoader.load(config_path)
    except CLIError as e:
        logger.error(f"Failed to load config: {e}")
        OutputHandler(verbosity=verbosity, no_color=no_color).error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    ctx.obj = CLIState(verbosity=verbosity, no_color=no_color, config=config)


@app.command()
def convert(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML file to convert"),
) -> None:
    """Convert HTML to editor formats and print them."""
    state: CLIState = ctx.obj
    html = _read_input(state, file)

    result = FormatConverter().convert_html(html)
    state.output.print_formats(result.items)

    if result.issues:
        state.output.print_issues(result.issues)
        raise typer.Exit(ExitCode.CONVERSION_ERROR)


@app.command()
def normalize(
    ctx: typer.Context,
    file: str = typer.Argument(..., help="HTML file to normalize"),
) -> None:
    """Wrap loose inline content of an HTML body into paragraphs."""
    state: CLIState = ctx.obj
    html = _read_input(state, file)

    converter = HtmlConverter()
    result = normalize_nodes(converter.html_to_nodes(html))
    state.output.print(converter.nodes_to_html(result.items))

    if result.issues:
        state.output.print_issues(result.issues)
        raise typer.Exit(ExitCode.CONVERSION_ERROR)


@app.command()
def pages(ctx: typer.Context) -> None:
    """List the pages and drafts of the local store."""
    state: CLIState = ctx.obj
    try:
        stored = LocalPageStore(state.config.store_path).list_pages()
    except StoreError as e:
        logger.error(f"Cannot list pages: {e}")
        state.output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    state.output.print_pages(stored)


@app.command()
def show(
    ctx: typer.Context,
    page_id: int = typer.Argument(..., help="Local id of the page to open"),
) -> None:
    """Open a stored page through the editor and print its formats."""
    state: CLIState = ctx.obj
    exit_code = ShowCommand(state.output, state.config).run(page_id)
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
