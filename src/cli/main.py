"""Main CLI entry point for the gist command.

This module provides the Typer application that serves as the entry point
for the gist command-line tool: list mirrored gist files, edit one and push
it, or create a new gist.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.edit_command import EditCommand
from src.cli.list_command import ListCommand
from src.cli.new_command import NewCommand
from src.cli.output import OutputHandler

__version__ = "0.1.0"

app = typer.Typer(
    name="gist",
    help="""Edit your GitHub gists through local git mirrors.

QUICK START:
  gist list                    # List files of all your gists
  gist edit notes.md           # Edit a file and push the change
  gist new notes.md -d "Notes" # Create a gist from local files

Credentials come from USER (or GIST_USER) and GITHUB_TOKEN, optionally via a .env file.""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class GlobalOptions:
    """Options shared by every subcommand."""
    verbosity: int = 0
    no_color: bool = False
    config_path: Optional[str] = None


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

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

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

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
        log_file = log_path / f"gist_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gist version {__version__}")
        raise typer.Exit()


def _options(ctx: typer.Context) -> GlobalOptions:
    return ctx.obj if isinstance(ctx.obj, GlobalOptions) else GlobalOptions()


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
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Configuration file (default: ~/.gist/config.yaml)",
        metavar="FILE",
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
    """Edit your GitHub gists through local git mirrors."""
    _configure_logging(verbosity, logdir)
    ctx.obj = GlobalOptions(
        verbosity=verbosity,
        no_color=no_color,
        config_path=config_path,
    )


@app.command("list")
def list_command(
    ctx: typer.Context,
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Ignore the cached listing and fetch it from GitHub",
    ),
) -> None:
    """List the files of all mirrored gists."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    exit_code = ListCommand(
        config_path=options.config_path,
        output_handler=output,
    ).run(refresh=refresh)
    raise typer.Exit(exit_code)


@app.command("edit")
def edit_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the gist file to edit"),
    page_id: Optional[str] = typer.Option(
        None,
        "--id",
        help="Gist id, when several gists hold a file with this name",
    ),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        help="Ignore the cached listing and fetch it from GitHub",
    ),
) -> None:
    """Open a gist file in your editor and push the change."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    exit_code = EditCommand(
        config_path=options.config_path,
        output_handler=output,
    ).run(name, page_id=page_id, refresh=refresh)
    raise typer.Exit(exit_code)


@app.command("new")
def new_command(
    ctx: typer.Context,
    paths: List[str] = typer.Argument(..., help="Local files to upload"),
    description: str = typer.Option(
        "",
        "--description",
        "-d",
        help="Gist description",
    ),
    public: bool = typer.Option(
        False,
        "--public",
        help="Create a public gist (secret by default)",
    ),
) -> None:
    """Create a gist from local files."""
    options = _options(ctx)
    output = OutputHandler(verbosity=options.verbosity, no_color=options.no_color)
    exit_code = NewCommand(
        config_path=options.config_path,
        output_handler=output,
    ).run(paths, description=description, public=public)
    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
