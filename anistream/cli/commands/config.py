"""
Configuration Command - Settings management functionality.

This module implements configuration commands for showing, updating and
resetting application settings.
"""

import json
from typing import Optional

import typer
from rich.syntax import Syntax

from anistream.cli import context
from anistream.core.exceptions import ConfigurationError
from anistream.ui import display_info, get_console, handle_error

# Create config command group
app = typer.Typer(
    name="config",
    help="⚙️  Manage application configuration and settings",
    no_args_is_help=True,
)


@app.command(name="show")
def show_config(
    section: Optional[str] = typer.Argument(
        None,
        help="Section to display: a settings section (http, ui, search, logging) or 'sources'"
    ),
) -> None:
    """📋 Display current configuration."""
    try:
        config_manager = context.get_config_manager()
        if section == "sources":
            data = config_manager.sources.model_dump(mode="json")
        elif section is None:
            data = {
                "settings": config_manager.settings.model_dump(mode="json"),
                "sources": config_manager.sources.model_dump(mode="json"),
            }
        else:
            data = config_manager.get_setting(section)
            if data is None:
                raise ConfigurationError(f"Unknown configuration section: {section}")

        get_console().print(Syntax(json.dumps(data, indent=2, ensure_ascii=False), "json"))
    except Exception as e:
        handle_error(e, "Failed to display configuration")
        raise typer.Exit(1)


@app.command(name="set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key (dot notation, e.g. http.timeout)"),
    value: str = typer.Argument(..., help="New value for the setting"),
) -> None:
    """✏️  Update a single setting."""
    try:
        context.get_config_manager().update_setting(key, _parse_value(value))
        display_info(f"{key} = {value}", "✅ Configuration Updated")
    except Exception as e:
        handle_error(e, f"Failed to update '{key}'")
        raise typer.Exit(1)


@app.command(name="reset")
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """♻️  Reset all configuration to defaults."""
    if not yes and not typer.confirm("Reset settings and sources to defaults?"):
        raise typer.Exit()
    try:
        context.get_config_manager().reset_to_defaults()
        display_info("Configuration reset to defaults.", "✅ Configuration Reset")
    except Exception as e:
        handle_error(e, "Failed to reset configuration")
        raise typer.Exit(1)


def _parse_value(value: str):
    """Interpret a command-line value as JSON when possible, else as a string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value
