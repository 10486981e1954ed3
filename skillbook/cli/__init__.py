"""CLI tools — skillbook index, validate, list, show, categories."""

from __future__ import annotations

import logging
import os
from importlib import metadata

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.logging import RichHandler

from skillbook.cli.skill_index import index_command
from skillbook.cli.skill_list import categories_command, list_command
from skillbook.cli.skill_show import show_command
from skillbook.cli.skill_validate import validate_command
from skillbook.config import ConfigLoadError, ConfigManager

app = typer.Typer(
    name="skillbook",
    help="skillbook — index and lint a corpus of SKILL.md documents.",
    no_args_is_help=True,
)

app.command("index")(index_command)
app.command("validate")(validate_command)
app.command("list")(list_command)
app.command("show")(show_command)
app.command("categories")(categories_command)

_LOG_HANDLER: logging.Handler | None = None


def _resolve_log_level(cli_level: str | None, config_level: str) -> int:
    """Pick the log level: CLI flag, then SKILLBOOK_LOG_LEVEL, then config."""
    level_name = (cli_level or os.getenv("SKILLBOOK_LOG_LEVEL", "") or config_level).strip().upper()
    level = getattr(logging, level_name, None)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(level: int) -> logging.Logger:
    """Route skillbook.* loggers to stderr through rich, once per process."""
    global _LOG_HANDLER
    logger = logging.getLogger("skillbook")
    if _LOG_HANDLER is None:
        _LOG_HANDLER = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=False)
        logger.addHandler(_LOG_HANDLER)
    logger.setLevel(level)
    return logger


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        version = metadata.version("skillbook")
    except metadata.PackageNotFoundError:
        version = "unknown"
    typer.echo(f"skillbook {version}")
    raise typer.Exit(0)


@app.callback()
def root(
    config: str = typer.Option("", "--config", help="Path to skillbook.yaml (default: ./skillbook.yaml)."),
    log_level: str = typer.Option("", "--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show installed version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Load configuration and set up logging before running a command."""
    try:
        manager = ConfigManager.load(config_path=config or None)
    except (ConfigLoadError, PydanticValidationError) as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(2) from None
    configure_logging(_resolve_log_level(log_level or None, manager.get().logging.level))


def main() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    main()
