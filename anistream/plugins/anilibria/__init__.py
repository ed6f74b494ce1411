"""
Anilibria Plugin - Russian anime source plugin for anilibria.tv

This plugin provides the catalog listing, search, release details with
episode playlists, and HLS stream links from anilibria.tv.
"""

from .plugin import AnilibriaPlugin, plugin_metadata, SUPPORTED_TYPES, MAIN_PAGE
from .config import AnilibriaConfig, get_default_config
from .parser import AnilibriaParser, get_type
from .tracker import AnilibriaTracker

__all__ = [
    "AnilibriaPlugin",
    "plugin_metadata",
    "SUPPORTED_TYPES",
    "MAIN_PAGE",
    "AnilibriaConfig",
    "get_default_config",
    "AnilibriaParser",
    "AnilibriaTracker",
    "get_type",
]
