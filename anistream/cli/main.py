"""
CLI Main Application - Typer app entry point.

This module provides the main CLI application entry point with
configuration loading, logging and theme setup, and command registration.
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.traceback import install as install_rich_traceback

from anistream import __version__
from anistream.core import ConfigManager, create_default_config_files
from anistream.core.exceptions import AniStreamError, ConfigurationError
from anistream.ui import (
    setup_console,
    get_console,
    ThemeName,
    set_theme,
    handle_error,
    display_info,
)
from anistream.cli.context import get_config_manager, set_config_manager


# Create main Typer application
app = typer.Typer(
    name="anistream",
    help="🎌 Browse, search and resolve streams from anime sites",
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        is_flag=True,
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory path",
        exists=False,
        file_okay=False,
        dir_okay=True,
    ),
    theme: Optional[ThemeName] = typer.Option(
        None,
        "--theme",
        help="UI color theme",
        case_sensitive=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
        is_flag=True,
    ),
) -> None:
    """
    🎌 AniStream - content adapters for anime streaming sites.

    Lists homepage categories, searches titles, loads title details with
    their episodes and resolves episodes into playable stream links.
    """
    if version:
        get_console().print(f"[bold blue]AniStream[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    try:
        _initialize_application(config_dir=config_dir, theme=theme, debug=debug)
    except Exception as e:
        if isinstance(e, AniStreamError):
            handle_error(e, "During application initialization")
        else:
            handle_error(e, "Unexpected error during startup", show_traceback=debug)
        raise typer.Exit(1)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _initialize_application(
    config_dir: Optional[Path] = None,
    theme: Optional[ThemeName] = None,
    debug: bool = False,
) -> None:
    """
    Initialize the application with configuration and UI setup.

    Args:
        config_dir: Configuration directory override
        theme: Theme override
        debug: Enable debug mode
    """
    install_rich_traceback(show_locals=debug)

    if config_dir is None:
        config_dir = Path("config")

    if not config_dir.exists():
        create_default_config_files(config_dir)

    try:
        config_manager = ConfigManager(config_dir)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}", str(config_dir))
    set_config_manager(config_manager)

    logging_settings = config_manager.settings.logging
    _setup_logging(logging_settings.level, logging_settings.file, debug)

    _setup_ui(theme, debug)


def _setup_logging(level: str = "WARNING", log_file: Optional[str] = None, debug: bool = False) -> None:
    """
    Set up application logging.

    Args:
        level: Configured log level name
        log_file: Optional file receiving a copy of the log
        debug: Force debug logging
    """
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def _setup_ui(theme_override: Optional[ThemeName] = None, debug: bool = False) -> None:
    """Set up UI console and theme."""
    if theme_override:
        theme = theme_override
    else:
        try:
            theme = ThemeName(get_config_manager().settings.ui.color_theme)
        except (RuntimeError, ValueError):
            theme = ThemeName.DEFAULT

    set_theme(theme)
    setup_console(theme_name=theme)

    if debug:
        display_info(f"UI initialized with theme: {theme.value}")


def _register_commands() -> None:
    """Register commands and command groups with the main app."""
    from anistream.cli.commands import config, home, links, load, search, sources

    app.command(name="home")(home.show_home)
    app.command(name="search")(search.search_titles)
    app.command(name="load")(load.load_title)
    app.command(name="links")(links.resolve_links)
    app.add_typer(sources.app, name="sources", help="🔌 Manage source plugins")
    app.add_typer(config.app, name="config", help="⚙️  Manage configuration")


_register_commands()


def cli_main() -> None:
    """Main CLI entry point for the anistream command."""
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


__all__ = ["app", "cli_main"]
