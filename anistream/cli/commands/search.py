"""
Search Command - Search one source or every enabled source.
"""

import asyncio
import logging
from typing import Dict, List, Optional

import typer

from anistream.cli import context
from anistream.core.models import SearchResult
from anistream.ui import UIComponents, display_warning, get_console, handle_error, status_spinner


logger = logging.getLogger(__name__)


def search_titles(
    query: str = typer.Argument(..., help="Title to search for"),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Search a single source instead of all enabled ones"
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-l", min=1, max=200, help="Maximum results to display per source"
    ),
) -> None:
    """
    🔍 Search for titles.

    Examples:

        anistream search "Магическая битва"

        anistream search "Chainsaw Man" --source anilibria --limit 5
    """
    try:
        config_manager = context.get_config_manager()
        min_length = config_manager.settings.search.min_query_length
        if len(query.strip()) < min_length:
            display_warning(
                f"Search query must be at least {min_length} characters long.",
                "⚠️  Query Too Short"
            )
            raise typer.Exit(1)

        limit = limit or config_manager.settings.search.max_results_per_source
        asyncio.run(_search(query.strip(), source, limit))
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Search cancelled by user[/yellow]")
        raise typer.Exit(130)
    except Exception as e:
        handle_error(e, "During search")
        raise typer.Exit(1)


async def _search(query: str, source: Optional[str], limit: int) -> None:
    plugin_manager = context.create_plugin_manager()
    try:
        with status_spinner(f"Searching for '{query}'..."):
            if source:
                results: Dict[str, List[SearchResult]] = {source: await plugin_manager.search(source, query)}
            else:
                results = await plugin_manager.search_all(query)
    finally:
        await plugin_manager.cleanup()

    if not any(results.values()):
        display_warning(
            f"No results found for '{query}'.\n\n"
            "Try:\n"
            "• Different search terms or the original title\n"
            "• Enabling more sources with 'anistream sources enable'",
            "🔍 No Results Found"
        )
        return

    components = UIComponents()
    for name, items in results.items():
        if items:
            components.console.print(components.create_listing_table(items[:limit], title=f"{name}: {query}"))
