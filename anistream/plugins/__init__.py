"""
Plugin Layer - Site adapter implementations.

This module contains the adapter contract and the individual site
adapters that provide listings, search, details and stream links.
"""

from anistream.plugins.base import BasePlugin, PluginMetadata
from anistream.plugins.common import (
    HttpClient,
    HTMLParser,
    QualityExtractor,
    URLHelper,
    TextCleaner,
    try_parse_json,
)

__all__ = [
    # Adapter contract
    "BasePlugin",
    "PluginMetadata",
    # Plugin Development Utilities
    "HttpClient",
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
    "try_parse_json",
]
