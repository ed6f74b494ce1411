"""
Core Data Models - Pydantic models for the adapter data model.

This module defines the request-scoped structures exchanged between site
adapters and their callers: listing items, detail records, episodes and
resolved extractor links. All models use Pydantic for validation and
serialization; none of them is persisted.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class TvType(str, Enum):
    """Content classification shared by every adapter."""

    MOVIE = "Movie"
    ANIME_MOVIE = "AnimeMovie"
    ANIME = "Anime"
    OVA = "OVA"
    TV_SERIES = "TvSeries"
    ASIAN_DRAMA = "AsianDrama"

    def __str__(self) -> str:
        return self.value


class DubStatus(str, Enum):
    """Audio track status of an episode list."""

    DUBBED = "Dubbed"
    SUBBED = "Subbed"


class Quality(str, Enum):
    """Video quality labels inferred from stream names."""

    UNKNOWN = "unknown"
    P144 = "144p"
    P240 = "240p"
    P360 = "360p"
    LOW = "480p"
    MEDIUM = "720p"
    HIGH = "1080p"
    ULTRA = "1440p"
    FOUR_K = "2160p"

    @classmethod
    def from_height(cls, height: int) -> "Quality":
        """Map an exact pixel height to a Quality, UNKNOWN otherwise."""
        for quality in cls:
            if quality is not cls.UNKNOWN and quality.height == height:
                return quality
        return cls.UNKNOWN

    @property
    def height(self) -> int:
        """Get the height in pixels for this quality (0 when unknown)."""
        if self is Quality.UNKNOWN:
            return 0
        return int(self.value.replace('p', ''))

    def __str__(self) -> str:
        return self.value


class MainPageRequest(BaseModel):
    """A homepage category: display name plus the key sent to the site."""

    name: str = Field(..., description="Category display name")
    data: str = Field(..., description="Category key understood by the site")


class SearchResult(BaseModel):
    """
    Represents a listing item produced by a homepage or search page.

    Listing items are parsed from anchors; anything without a title or
    link is dropped before a SearchResult is created.
    """

    title: str = Field(..., min_length=1, description="Title shown in the listing")
    url: str = Field(..., description="Absolute URL of the detail page")
    api_name: str = Field(..., min_length=1, description="Adapter that produced the item")
    type: TvType = Field(TvType.ANIME, description="Content classification")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    dub_status: List[DubStatus] = Field(default_factory=list, description="Available audio tracks")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        return v.strip()

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v

    def __str__(self) -> str:
        return f"{self.title} ({self.api_name})"


# Homepage listings and search results share one model
ListingItem = SearchResult


class HomePageList(BaseModel):
    """A named row of listing items on the homepage."""

    name: str = Field(..., description="Row title")
    items: List[SearchResult] = Field(default_factory=list, description="Listing items")


class HomePageResponse(BaseModel):
    """Homepage result for a single page of one or more categories."""

    items: List[HomePageList] = Field(default_factory=list, description="Homepage rows")
    has_next: Optional[bool] = Field(None, description="Whether another page is available")


class Episode(BaseModel):
    """
    Represents a playable episode reference.

    ``data`` is opaque to callers and is handed back to the adapter's
    ``load_links``; for Anilibria it is a comma-separated list of
    ``[quality]url`` tokens.
    """

    data: str = Field(..., min_length=1, description="Playable-file reference")
    name: Optional[str] = Field(None, description="Episode display name")
    episode: Optional[int] = Field(None, ge=0, description="Episode number")
    poster_url: Optional[str] = Field(None, description="Episode poster URL")

    def __str__(self) -> str:
        return self.name or self.data


class LoadResponse(BaseModel):
    """
    Detail record for a single title.

    Enrichment fields (``mal_id``, ``anilist_id`` and the tracker art
    merged into the posters) stay unset when the metadata lookup finds
    nothing.
    """

    title: str = Field(..., min_length=1, description="Title")
    url: str = Field(..., description="Detail page URL")
    api_name: str = Field(..., min_length=1, description="Adapter that produced the record")
    type: TvType = Field(TvType.ANIME, description="Content classification")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    background_poster_url: Optional[str] = Field(None, description="Background/cover image URL")
    year: Optional[int] = Field(None, description="Release year")
    plot: Optional[str] = Field(None, description="Synopsis")
    tags: List[str] = Field(default_factory=list, description="Genre tags")
    episodes: Dict[DubStatus, List[Episode]] = Field(default_factory=dict, description="Episodes by audio track")
    mal_id: Optional[int] = Field(None, description="MyAnimeList identifier")
    anilist_id: Optional[int] = Field(None, description="AniList identifier")

    @field_validator('tags')
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        """Drop blank tags."""
        return [tag.strip() for tag in v if tag and tag.strip()]

    def add_episodes(self, status: DubStatus, episodes: Optional[List[Episode]]) -> None:
        """Attach an episode list under an audio track, ignoring empty lists."""
        if not episodes:
            return
        self.episodes[status] = list(episodes)

    @property
    def all_episodes(self) -> List[Episode]:
        """All episodes across audio tracks."""
        return [episode for episodes in self.episodes.values() for episode in episodes]

    def __str__(self) -> str:
        return f"{self.title} ({self.type})"


class Tracker(BaseModel):
    """External catalog identifiers and art found for a title."""

    mal_id: Optional[int] = None
    anilist_id: Optional[str] = None
    image: Optional[str] = None
    cover: Optional[str] = None


class SubtitleFile(BaseModel):
    """External subtitle track."""

    lang: str = Field(..., description="Subtitle language")
    url: str = Field(..., description="Subtitle file URL")


class ExtractorLink(BaseModel):
    """A resolved, directly playable stream."""

    source: str = Field(..., description="Adapter that resolved the link")
    name: str = Field(..., description="Display name of the link")
    url: str = Field(..., min_length=1, description="Stream URL")
    referer: str = Field("", description="Referer header the stream requires")
    quality: Quality = Field(Quality.UNKNOWN, description="Inferred quality")
    is_m3u8: bool = Field(False, description="Whether the stream is an HLS playlist")

    @property
    def requires_referer(self) -> bool:
        """Whether the stream must be requested with a Referer header."""
        return bool(self.referer)

    @property
    def headers(self) -> Dict[str, str]:
        """Request headers needed to play the stream."""
        return {"Referer": self.referer} if self.referer else {}

    def __str__(self) -> str:
        return f"{self.name} [{self.quality}] {self.url}"


# Callback signatures of load_links
SubtitleCallback = Callable[[SubtitleFile], None]
LinkCallback = Callable[[ExtractorLink], None]

# Export all models and types
__all__ = [
    "TvType",
    "DubStatus",
    "Quality",
    "MainPageRequest",
    "SearchResult",
    "ListingItem",
    "HomePageList",
    "HomePageResponse",
    "Episode",
    "LoadResponse",
    "Tracker",
    "SubtitleFile",
    "ExtractorLink",
    "SubtitleCallback",
    "LinkCallback",
]
