"""
Load Command - Show a title's details and episodes.
"""

import asyncio
import logging
from typing import Optional

import typer

from anistream.cli import context
from anistream.ui import UIComponents, display_warning, get_console, handle_error, status_spinner


logger = logging.getLogger(__name__)


def load_title(
    url: str = typer.Argument(..., help="Detail page URL from a listing"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Source plugin the URL belongs to"),
) -> None:
    """
    📺 Show details and episodes of a title.

    Each episode's data string can be passed to 'anistream links'.
    """
    try:
        asyncio.run(_load(url, source or context.default_source()))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, f"While loading {url}")
        raise typer.Exit(1)


async def _load(url: str, source: str) -> None:
    plugin_manager = context.create_plugin_manager()
    try:
        with status_spinner("Loading details..."):
            detail = await plugin_manager.load(source, url)
    finally:
        await plugin_manager.cleanup()

    if detail is None:
        display_warning(f"No title found at {url}.", "📺 Nothing Found")
        return

    components = UIComponents()
    components.console.print(components.create_detail_panel(detail))
    if detail.all_episodes:
        components.console.print(components.create_episodes_table(detail))
    else:
        display_warning("This title has no playable episodes yet.", "📺 No Episodes")
