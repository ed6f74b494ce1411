"""
Error Handler - Error panels with context and suggestions.

This module provides consistent error display across the command line,
with one panel style per error class of the core taxonomy.
"""

import traceback
from typing import List, Optional, Tuple

from rich.panel import Panel

from anistream.core.exceptions import (
    AniStreamError,
    ConfigurationError,
    LoadError,
    NetworkError,
    PluginError,
)
from anistream.ui.console import get_console
from anistream.ui.themes import get_palette


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    @property
    def console(self):
        return get_console()

    @property
    def palette(self):
        return get_palette()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, LoadError):
            fields = [("Plugin", error.plugin_name), ("URL", error.url)]
            self._render("📄 Load Error", error.message, fields, context, [
                "The site may have changed its page or response format",
                "Retry later; the site may be returning an error page",
                "Check the plugin with [cyan]anistream sources check[/cyan]",
            ], error.details if show_traceback else None)
        elif isinstance(error, PluginError):
            self._render("🔌 Plugin Error", error.message, [("Plugin", error.plugin_name)], context, [
                "List plugins with [cyan]anistream sources list[/cyan]",
                "Verify the plugin is enabled in sources configuration",
                "Use alternative sources if available",
            ], error.details if show_traceback else None)
        elif isinstance(error, NetworkError):
            suggestions = [
                "Check your internet connection",
                "Verify the source website is accessible",
                "Check if a VPN or proxy is required",
            ]
            if error.status_code == 403:
                suggestions.insert(0, "The source may be blocking requests - try a different user agent")
            elif error.status_code == 404:
                suggestions.insert(0, "The requested content may no longer be available")
            elif error.status_code and error.status_code >= 500:
                suggestions.insert(0, "The source server is experiencing issues")
            fields = [("URL", error.url), ("Status Code", error.status_code)]
            self._render("🌐 Network Error", error.message, fields, context, suggestions,
                         error.details if show_traceback else None)
        elif isinstance(error, ConfigurationError):
            self._render("⚙️  Configuration Error", error.message, [("Configuration file", error.config_path)],
                         context, [
                             "Check configuration file syntax and format",
                             "Inspect settings with [cyan]anistream config show[/cyan]",
                             "Reset to defaults with [cyan]anistream config reset[/cyan]",
                         ], error.details if show_traceback else None)
        elif isinstance(error, AniStreamError):
            self._render("❌ Error", error.message, [], context, [],
                         traceback.format_exc() if show_traceback else error.details)
        else:
            self._render("💥 Unexpected Error", f"{error.__class__.__name__}: {error}", [], context, [
                "Check the command syntax and arguments",
                "Run again with [cyan]--debug[/cyan] for details",
            ], traceback.format_exc() if show_traceback else None)

    def _render(
        self,
        title: str,
        message: str,
        fields: List[Tuple[str, object]],
        context: Optional[str],
        suggestions: List[str],
        details: Optional[object] = None
    ) -> None:
        palette = self.palette
        content_parts = [f"[{palette.error}]{message}[/{palette.error}]"]

        for label, value in fields:
            if value:
                content_parts.append(f"\n[dim]{label}:[/dim] [cyan]{value}[/cyan]")

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            content_parts.append(f"\n\n[{palette.info}]💡 Suggestions:[/{palette.info}]")
            content_parts.extend(f"• {suggestion}" for suggestion in suggestions)

        if details:
            content_parts.append(f"\n\n[dim]Details:[/dim]\n{details}")

        self.console.print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style=palette.error,
            padding=(1, 2)
        ))

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        palette = self.palette
        self.console.print(Panel(
            f"[{palette.warning}]{message}[/{palette.warning}]",
            title=f"[{palette.warning}]{title}[/{palette.warning}]",
            border_style=palette.warning,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        palette = self.palette
        self.console.print(Panel(
            f"[{palette.info}]{message}[/{palette.info}]",
            title=f"[{palette.info}]{title}[/{palette.info}]",
            border_style=palette.info,
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """Handle and display an error using the global error handler."""
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


__all__ = [
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
]
