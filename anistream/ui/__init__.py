"""
UI Layer - Visual design system and Rich components.

This module contains the theme system, console management, error panels
and result tables shared by all CLI commands.
"""

from anistream.ui.components import UIComponents
from anistream.ui.themes import ThemeManager, ThemeName, get_theme, get_palette, set_theme
from anistream.ui.error_handler import ErrorHandler, handle_error, display_warning, display_info
from anistream.ui.progress import status_spinner
from anistream.ui.console import get_console, setup_console

__all__ = [
    # Core UI Components
    "UIComponents",
    # Theme System
    "ThemeManager",
    "ThemeName",
    "get_theme",
    "get_palette",
    "set_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
    # Progress
    "status_spinner",
    # Console Management
    "get_console",
    "setup_console",
]
