"""
UI Components - Standardized Rich components for consistent interface.

This module renders adapter results: listing tables, the detail panel,
episode and link tables, and the plugin status table.
"""

from typing import Any, Dict, List, Optional

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from anistream.core.models import ExtractorLink, LoadResponse, Quality, SearchResult
from anistream.ui.console import get_console
from anistream.ui.themes import get_palette


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self):
        """Initialize UI components with current theme."""
        self.console = get_console()
        self.palette = get_palette()

    def create_panel(
        self,
        content: Any,
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
        border_style: Optional[str] = None,
        padding: tuple = (1, 2),
        expand: bool = True
    ) -> Panel:
        """Create a styled panel with consistent theming."""
        return Panel(
            content,
            title=title,
            subtitle=subtitle,
            border_style=border_style or self.palette.border_primary,
            padding=padding,
            expand=expand
        )

    def create_data_table(
        self,
        headers: List[str],
        rows: List[List[str]],
        title: Optional[str] = None,
        show_lines: bool = False,
        expand: bool = True
    ) -> Table:
        """
        Create a data table with consistent styling.

        Args:
            headers: Column headers
            rows: Table rows
            title: Table title
            show_lines: Whether to show row lines
            expand: Whether table should expand to full width

        Returns:
            Styled Table object
        """
        table = Table(
            title=title,
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_secondary,
            show_lines=show_lines,
            expand=expand
        )

        for header in headers:
            table.add_column(header)

        for row in rows:
            table.add_row(*row)

        return table

    def create_listing_table(self, results: List[SearchResult], title: Optional[str] = None) -> Table:
        """Create a table of listing items."""
        rows = [
            [str(index), escape(item.title), escape(item.url), escape(item.poster_url or "-")]
            for index, item in enumerate(results, 1)
        ]
        return self.create_data_table(["#", "Title", "URL", "Poster"], rows, title=title)

    def create_detail_panel(self, detail: LoadResponse) -> Panel:
        """Create a panel summarising a detail record."""
        palette = self.palette
        lines = [
            f"[bold]{escape(detail.title)}[/bold]",
            f"[dim]Type:[/dim] {detail.type}",
            f"[dim]Year:[/dim] {detail.year or 'Unknown'}",
            f"[dim]Genres:[/dim] {escape(', '.join(detail.tags)) or '-'}",
            f"[dim]Poster:[/dim] {escape(detail.poster_url or '-')}",
        ]
        if detail.mal_id or detail.anilist_id:
            lines.append(f"[dim]MAL / AniList:[/dim] {detail.mal_id or '-'} / {detail.anilist_id or '-'}")
        if detail.plot:
            lines.append(f"\n{escape(detail.plot)}")

        return self.create_panel(
            "\n".join(lines),
            title=f"[{palette.primary}]📺 {escape(detail.api_name)}[/{palette.primary}]",
            subtitle=escape(detail.url),
        )

    def create_episodes_table(self, detail: LoadResponse) -> Table:
        """Create a table of a detail record's episodes with their data strings."""
        rows = []
        for status, episodes in detail.episodes.items():
            for index, episode in enumerate(episodes, 1):
                rows.append([str(index), escape(episode.name or "-"), status.value, escape(episode.data)])
        return self.create_data_table(["#", "Episode", "Audio", "Data"], rows, title="Episodes")

    def create_links_table(self, links: List[ExtractorLink]) -> Table:
        """Create a table of resolved stream links."""
        rows = [
            [
                str(index),
                self.format_quality(link.quality),
                "HLS" if link.is_m3u8 else "File",
                escape(link.url),
                escape(link.referer or "-"),
            ]
            for index, link in enumerate(links, 1)
        ]
        return self.create_data_table(["#", "Quality", "Kind", "URL", "Referer"], rows, title="Links")

    def create_plugin_status_table(self, status: Dict[str, Dict[str, Any]]) -> Table:
        """Create a table summarising plugin status."""
        rows = []
        for name, info in status.items():
            if info.get("error"):
                state = f"[status.error]error: {escape(info['error'])}[/status.error]"
            elif info.get("enabled"):
                state = "[status.enabled]enabled[/status.enabled]"
            else:
                state = "[status.disabled]disabled[/status.disabled]"
            rows.append([name, info.get("class") or "-", str(info.get("priority") or "-"), state])
        return self.create_data_table(["Source", "Class", "Priority", "Status"], rows, title="Sources")

    @staticmethod
    def format_quality(quality: Quality) -> str:
        """Color a quality label by height."""
        if quality.height >= 1080:
            style = "quality.high"
        elif quality.height >= 720:
            style = "quality.medium"
        elif quality.height > 0:
            style = "quality.low"
        else:
            return "[muted]unknown[/muted]"
        return f"[{style}]{quality.value}[/{style}]"


__all__ = ["UIComponents"]
