"""
Sources Command - Plugin management functionality.

This module implements source plugin management commands for listing,
enabling, disabling and checking site adapters.
"""

import asyncio

import typer

from anistream.cli import context
from anistream.core.exceptions import PluginError
from anistream.ui import UIComponents, display_info, get_console, handle_error, status_spinner

# Create sources command group
app = typer.Typer(
    name="sources",
    help="🔌 Manage source plugins",
    no_args_is_help=True,
)


@app.command(name="list")
def list_sources() -> None:
    """📋 List discovered source plugins and their status."""
    try:
        plugin_manager = context.create_plugin_manager()
        components = UIComponents()
        components.console.print(components.create_plugin_status_table(plugin_manager.get_plugin_status()))
    except Exception as e:
        handle_error(e, "Failed to list sources")
        raise typer.Exit(1)


@app.command(name="enable")
def enable_source(
    source_name: str = typer.Argument(..., help="Source plugin name to enable"),
) -> None:
    """✅ Enable a source plugin."""
    _set_enabled(source_name, True)


@app.command(name="disable")
def disable_source(
    source_name: str = typer.Argument(..., help="Source plugin name to disable"),
) -> None:
    """🚫 Disable a source plugin."""
    _set_enabled(source_name, False)


def _set_enabled(source_name: str, enabled: bool) -> None:
    try:
        plugin_manager = context.create_plugin_manager()
        if source_name not in plugin_manager.available_plugins:
            raise PluginError(f"Unknown source: {source_name}", plugin_name=source_name)

        config_manager = context.get_config_manager()
        if enabled:
            config_manager.enable_source(source_name)
        else:
            config_manager.disable_source(source_name)

        state = "enabled" if enabled else "disabled"
        display_info(f"Source '{source_name}' {state}.", "🔌 Sources Updated")
    except Exception as e:
        handle_error(e, f"Failed to update source '{source_name}'")
        raise typer.Exit(1)


@app.command(name="check")
def check_sources() -> None:
    """🩺 Check that every enabled source answers."""
    try:
        results = asyncio.run(_check_sources())
    except Exception as e:
        handle_error(e, "Failed to check sources")
        raise typer.Exit(1)

    console = get_console()
    if not results:
        console.print("[warning]No sources are enabled[/warning]")
        raise typer.Exit(1)

    for name, ok in results.items():
        mark = "[success]✓ reachable[/success]" if ok else "[error]✗ unreachable[/error]"
        console.print(f"{name}: {mark}")

    if not all(results.values()):
        raise typer.Exit(1)


async def _check_sources() -> dict:
    plugin_manager = context.create_plugin_manager()
    try:
        with status_spinner("Checking sources..."):
            return {
                name: await plugin.validate_connection()
                for name, plugin in plugin_manager.get_active_plugins().items()
            }
    finally:
        await plugin_manager.cleanup()
