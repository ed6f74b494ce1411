"""
Home Command - Browse a source's homepage categories.
"""

import asyncio
import logging
from typing import Optional

import typer

from anistream.cli import context
from anistream.ui import UIComponents, display_warning, get_console, handle_error, status_spinner


logger = logging.getLogger(__name__)


def show_home(
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Source plugin to browse"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Category key or name (defaults to the first category)"
    ),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """
    🏠 Show one page of a homepage category.

    Examples:

        anistream home

        anistream home --category 2 --page 3
    """
    try:
        asyncio.run(_show_home(source or context.default_source(), category, page))
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, "While loading the homepage")
        raise typer.Exit(1)


async def _show_home(source: str, category: Optional[str], page: int) -> None:
    plugin_manager = context.create_plugin_manager()
    try:
        with status_spinner(f"Loading {source} homepage..."):
            response = await plugin_manager.get_main_page(source, page, category)
    finally:
        await plugin_manager.cleanup()

    components = UIComponents()
    for row in response.items:
        if not row.items:
            display_warning(f"No titles on page {page} of '{row.name}'.", "🏠 Empty Page")
            continue
        components.console.print(components.create_listing_table(row.items, title=f"{row.name} · page {page}"))
