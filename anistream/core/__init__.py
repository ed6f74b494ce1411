"""
Core Layer - Business logic and application services.

This module contains the data models, error taxonomy, configuration
handling and plugin management that the command line builds on.
"""

from anistream.core.exceptions import (
    AniStreamError,
    ConfigurationError,
    LoadError,
    NetworkError,
    PluginError,
)
from anistream.core.models import (
    DubStatus,
    Episode,
    ExtractorLink,
    HomePageList,
    HomePageResponse,
    LoadResponse,
    MainPageRequest,
    Quality,
    SearchResult,
    SubtitleFile,
    Tracker,
    TvType,
)
from anistream.core.config_schemas import AppSettings, SourcesConfig, SourceConfig
from anistream.core.config_defaults import (
    create_default_config_files,
    get_default_settings,
    get_default_sources,
)
from anistream.core.config_manager import ConfigManager
from anistream.core.plugin_manager import PluginManager

__all__ = [
    # Data Models
    "DubStatus",
    "Episode",
    "ExtractorLink",
    "HomePageList",
    "HomePageResponse",
    "LoadResponse",
    "MainPageRequest",
    "Quality",
    "SearchResult",
    "SubtitleFile",
    "Tracker",
    "TvType",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "SourcesConfig",
    "SourceConfig",
    "create_default_config_files",
    "get_default_settings",
    "get_default_sources",
    # Plugin Management
    "PluginManager",
    # Exceptions
    "AniStreamError",
    "ConfigurationError",
    "LoadError",
    "NetworkError",
    "PluginError",
]
