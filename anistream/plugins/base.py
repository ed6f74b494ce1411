"""
Base Plugin Interface - Abstract contract for site adapters.

Every site adapter implements the same four operations: a paged homepage
listing, search, detail loading, and link resolution. HTTP plumbing is
not part of the contract; adapters compose an ``HttpClient`` instead.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from anistream.core.models import (
    HomePageResponse,
    LinkCallback,
    LoadResponse,
    MainPageRequest,
    SearchResult,
    SubtitleCallback,
    TvType,
)


logger = logging.getLogger(__name__)


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")
    lang: str = Field(default="en", description="Content language code")
    has_main_page: bool = Field(default=False, description="Whether the homepage listing is supported")
    has_download_support: bool = Field(default=False, description="Whether links are downloadable")
    supported_types: FrozenSet[TvType] = Field(default_factory=frozenset, description="Content types served")
    rate_limit: float = Field(default=0.0, description="Minimum seconds between requests")


class BasePlugin(ABC):
    """
    Abstract base class for site adapters.

    Subclasses provide metadata, the homepage categories they serve and
    the four content operations.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the plugin with configuration.

        Args:
            config: Plugin-specific configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the base URL for the site."""

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def main_page(self) -> List[MainPageRequest]:
        """Homepage categories served by the adapter."""
        return []

    def get_main_page_request(self, key: str) -> MainPageRequest:
        """
        Look up a homepage category by key or display name.

        Raises:
            KeyError: If the adapter has no such category
        """
        for request in self.main_page:
            if key in (request.data, request.name):
                return request
        raise KeyError(key)

    @abstractmethod
    async def get_main_page(self, page: int, request: MainPageRequest) -> HomePageResponse:
        """
        Get one page of a homepage category.

        Raises:
            LoadError: If the listing payload cannot be parsed
        """

    @abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """
        Search the site by title.

        Raises:
            LoadError: If the search payload cannot be parsed
        """

    @abstractmethod
    async def load(self, url: str) -> Optional[LoadResponse]:
        """
        Load the detail record behind a listing item.

        Returns:
            The detail record, or None when the page has no title
        """

    @abstractmethod
    async def load_links(
        self,
        data: str,
        is_casting: bool,
        subtitle_callback: SubtitleCallback,
        callback: LinkCallback,
    ) -> bool:
        """
        Resolve an episode reference into playable links.

        Links and subtitles are emitted one at a time through the
        callbacks, in source order.

        Returns:
            True when resolution ran
        """

    async def validate_connection(self) -> bool:
        """Check that the site answers. Adapters without a client report True."""
        return True

    async def cleanup(self) -> None:
        """Release resources held by the plugin."""

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


__all__ = ["BasePlugin", "PluginMetadata"]
