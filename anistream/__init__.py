"""
AniStream - Content adapters for anime streaming sites.

A command-line tool and library that lists homepage categories, searches
titles, loads title details with episodes and resolves episodes into
playable stream links, built on aiohttp, Pydantic, Typer and Rich.
"""

__version__ = "0.1.0"

# Package metadata
__title__ = "anistream"
__description__ = "Content adapters for anime streaming sites"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

from anistream.core.models import (
    Episode,
    ExtractorLink,
    LoadResponse,
    Quality,
    SearchResult,
    TvType,
)

__all__ = [
    "__version__",
    "Episode",
    "ExtractorLink",
    "LoadResponse",
    "Quality",
    "SearchResult",
    "TvType",
]
