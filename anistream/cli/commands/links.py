"""
Links Command - Resolve an episode's data string into stream links.
"""

import asyncio
import logging
from typing import Optional

import typer
from rich.markup import escape

from anistream.cli import context
from anistream.ui import UIComponents, display_warning, get_console, handle_error


logger = logging.getLogger(__name__)


def resolve_links(
    data: str = typer.Argument(..., help="Episode data string as shown by 'anistream load'"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Source plugin the episode belongs to"),
) -> None:
    """
    🔗 Resolve playable links for an episode.

    Example:

        anistream links "[480p]https://host/480.m3u8,[720p]https://host/720.m3u8"
    """
    try:
        asyncio.run(_links(data, source or context.default_source()))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, "While resolving links")
        raise typer.Exit(1)


async def _links(data: str, source: str) -> None:
    plugin_manager = context.create_plugin_manager()
    try:
        links, subtitles = await plugin_manager.load_links(source, data)
    finally:
        await plugin_manager.cleanup()

    if not links:
        display_warning("No links could be resolved from the episode data.", "🔗 No Links")
        return

    components = UIComponents()
    components.console.print(components.create_links_table(links))
    for subtitle in subtitles:
        components.console.print(f"[dim]Subtitle ({escape(subtitle.lang)}):[/dim] {escape(subtitle.url)}")
