"""
Anilibria Tracker Lookup

Best-effort enrichment of Anilibria releases with AniList/MyAnimeList
identifiers and artwork, looked up by title on the consumet meta API.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from anistream.core.exceptions import NetworkError
from anistream.core.models import Tracker
from anistream.plugins.common import HttpClient


logger = logging.getLogger(__name__)


class MediaTitle(BaseModel):
    romaji: Optional[str] = None
    english: Optional[str] = None


class MediaResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    ani_id: Optional[str] = Field(None, alias="id")
    mal_id: Optional[int] = Field(None, alias="malId")
    title: Optional[MediaTitle] = None
    release_date: Optional[int] = Field(None, alias="releaseDate")
    type: Optional[str] = None
    image: Optional[str] = None
    cover: Optional[str] = None


class MediaSearch(BaseModel):
    results: List[MediaResult] = Field(default_factory=list)


def _same(left: Optional[str], right: Optional[str]) -> bool:
    # Two missing values compare equal
    if left is None or right is None:
        return left is None and right is None
    return left.casefold() == right.casefold()


def matches(media: MediaResult, title: Optional[str], track_type: Optional[str], year: Optional[int]) -> bool:
    """
    Whether a lookup result belongs to the release.

    Any of three independent checks is enough: the English title matches,
    the romaji title matches, or both the type and the release year match.
    """
    english = media.title.english if media.title else None
    romaji = media.title.romaji if media.title else None
    return (
        _same(english, title)
        or _same(romaji, title)
        or (_same(media.type, track_type) and media.release_date == year)
    )


class AnilibriaTracker:
    """Client for the metadata lookup API."""

    def __init__(self, http: HttpClient, tracker_url: str = "https://api.consumet.org/meta/anilist"):
        self.http = http
        self.tracker_url = tracker_url.rstrip("/")

    async def lookup(self, title: Optional[str], track_type: Optional[str], year: Optional[int]) -> Tracker:
        """
        Find catalog identifiers and art for a release.

        Never raises: a failed request, an unexpected payload or no
        matching result all produce an empty Tracker.
        """
        if not title:
            return Tracker()

        url = f"{self.tracker_url}/{quote(title, safe='')}"
        try:
            payload = await self.http.get_json(url)
            search = MediaSearch.model_validate(payload)
        except (NetworkError, ValidationError) as e:
            logger.debug(f"Tracker lookup failed for '{title}': {e}")
            return Tracker()

        media = next((m for m in search.results if matches(m, title, track_type, year)), None)
        if media is None:
            logger.debug(f"No tracker match for '{title}'")
            return Tracker()

        return Tracker(
            mal_id=media.mal_id,
            anilist_id=media.ani_id,
            image=media.image,
            cover=media.cover,
        )


__all__ = ["AnilibriaTracker", "MediaResult", "MediaTitle", "MediaSearch", "matches"]
