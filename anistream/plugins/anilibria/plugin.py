"""
Anilibria Plugin - Main plugin implementation for anilibria.tv

This module implements the Anilibria adapter: catalog listing and search
through the site's AJAX endpoints, release pages with their embedded
player playlist, and quality-tagged stream links.
"""

import json
import logging
from typing import Dict, List, Optional, Any

from anistream.core.models import (
    DubStatus,
    HomePageList,
    HomePageResponse,
    LinkCallback,
    LoadResponse,
    MainPageRequest,
    SearchResult,
    SubtitleCallback,
    Tracker,
    TvType,
)
from anistream.core.exceptions import NetworkError, PluginError
from anistream.plugins.base import BasePlugin, PluginMetadata
from anistream.plugins.common import HttpClient

from .config import AnilibriaConfig, merge_with_defaults
from .parser import AnilibriaParser
from .tracker import AnilibriaTracker


logger = logging.getLogger(__name__)


SUPPORTED_TYPES = frozenset({TvType.ANIME, TvType.ANIME_MOVIE, TvType.OVA})

MAIN_PAGE = [
    MainPageRequest(data="1", name="Новое"),
    MainPageRequest(data="2", name="Популярное"),
]

AJAX_HEADERS = {"X-Requested-With": "XMLHttpRequest"}
CATALOG_FILTER = json.dumps({"year": "", "genre": "", "season": ""}, separators=(",", ":"))

plugin_metadata = PluginMetadata(
    name="Anilibria",
    version="1.0.0",
    author="AniStream Team",
    description="Russian anime dubs from anilibria.tv",
    website="https://anilibria.tv",
    lang="ru",
    has_main_page=True,
    has_download_support=True,
    supported_types=SUPPORTED_TYPES,
    rate_limit=0.5,
)


class AnilibriaPlugin(BasePlugin):
    """
    Anilibria adapter.

    Listing and search responses are JSON envelopes around an HTML
    fragment; release pages carry the episode playlist inside the player
    script. Detail records are optionally enriched from the consumet
    AniList mirror.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize Anilibria plugin.

        Args:
            config: Plugin configuration dictionary
        """
        merged_config = merge_with_defaults(config)
        super().__init__(merged_config)

        try:
            self.plugin_config = AnilibriaConfig(**merged_config)
        except ValueError as e:
            logger.warning(f"Invalid configuration, using defaults: {e}")
            self.plugin_config = AnilibriaConfig()

        self.http = HttpClient(
            self.plugin_config.base_url,
            timeout=self.plugin_config.timeout,
            user_agent=self.plugin_config.user_agent,
            rate_limit=self.plugin_config.rate_limit,
        )
        self.parser = AnilibriaParser(base_url=self.plugin_config.base_url, api_name=plugin_metadata.name)
        self.tracker = AnilibriaTracker(self.http, self.plugin_config.tracker_url)

        logger.debug("Anilibria plugin initialized")

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return plugin_metadata

    @property
    def base_url(self) -> str:
        """Get base URL for Anilibria."""
        return self.plugin_config.base_url

    @property
    def main_page(self) -> List[MainPageRequest]:
        return MAIN_PAGE

    async def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        """
        Fetch one catalog page sorted by the category key.

        Raises:
            LoadError: If the catalog envelope cannot be parsed
        """
        body = await self.http.post_text(
            f"{self.base_url}/public/catalog.php",
            data={
                "page": str(page),
                "xpage": "catalog",
                "sort": request.data,
                "finish": "1",
                "search": CATALOG_FILTER,
            },
            headers=AJAX_HEADERS,
        )
        items = self.parser.parse_home(body)
        logger.info(f"Catalog '{request.name}' page {page}: {len(items)} items")
        return HomePageResponse(items=[HomePageList(name=request.name, items=items)])

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search Anilibria by title.

        Raises:
            PluginError: If the query is empty
            LoadError: If the search envelope cannot be parsed
        """
        if not query or not query.strip():
            raise PluginError("Search query cannot be empty", plugin_name=self.name)

        body = await self.http.post_text(
            f"{self.base_url}/public/search.php",
            data={"search": query.strip(), "small": "1"},
            headers=AJAX_HEADERS,
        )
        results = self.parser.parse_search(body)
        logger.info(f"Found {len(results)} results for query: '{query.strip()}'")
        return results

    async def load(self, url: str) -> Optional[LoadResponse]:
        """
        Load a release page with its episodes.

        Returns:
            The detail record, or None when the page has no release title
        """
        html = await self.http.get_text(url)
        detail = self.parser.parse_detail(html)
        if detail is None:
            logger.warning(f"No release title found at {url}")
            return None

        tracker = await self._lookup_tracker(detail["track_title"], detail["track_type"], detail["year"])

        response = LoadResponse(
            title=detail["title"],
            url=url,
            api_name=self.name,
            type=detail["type"],
            poster_url=tracker.image or detail["poster"],
            background_poster_url=tracker.cover or tracker.image or detail["poster"],
            year=detail["year"],
            plot=detail["plot"],
            tags=detail["tags"],
            mal_id=tracker.mal_id,
            anilist_id=_to_int(tracker.anilist_id),
        )
        response.add_episodes(DubStatus.SUBBED, detail["episodes"])
        return response

    async def _lookup_tracker(self, title: str, track_type: str, year: Optional[int]) -> Tracker:
        if not self.plugin_config.enable_tracker:
            return Tracker()
        return await self.tracker.lookup(title, track_type, year)

    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """Emit one HLS link per ``[quality]url`` token of ``data``."""
        for link in self.parser.parse_links(data, referer=f"{self.base_url}/"):
            callback(link)
        return True

    async def validate_connection(self) -> bool:
        """Check that the site answers."""
        try:
            await self.http.get_text(self.base_url)
            return True
        except NetworkError as e:
            self.logger.error(f"Connection validation failed: {e}")
            return False

    async def cleanup(self) -> None:
        """Close the HTTP session."""
        await self.http.close()


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


__all__ = ["AnilibriaPlugin", "plugin_metadata", "SUPPORTED_TYPES", "MAIN_PAGE"]
