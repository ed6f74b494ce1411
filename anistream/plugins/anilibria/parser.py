"""
Anilibria Data Parser

This module turns Anilibria responses into adapter models: the JSON
envelopes wrapping listing HTML, the release page, the embedded player
playlist and the comma-joined stream tokens.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import Tag
from pydantic import BaseModel, ValidationError

from anistream.core.exceptions import LoadError
from anistream.core.models import (
    DubStatus,
    Episode,
    ExtractorLink,
    SearchResult,
    TvType,
)
from anistream.plugins.common import (
    HTMLParser,
    QualityExtractor,
    TextCleaner,
    URLHelper,
    element_attr,
    try_parse_json,
)


logger = logging.getLogger(__name__)

# Labels of the release info block, as printed by the site
TYPE_LABEL = "Тип:"
SEASON_LABEL = "Сезон:"
GENRES_LABEL = "Жанры:"

MOVIE_KEYWORD = "Фильм"
SERIES_KEYWORD = "ТВ"

PLAYER_MARKER = "var player ="
QUALITY_TAG = re.compile(r"\[([0-9]+p)]")


class HomeEnvelope(BaseModel):
    table: Optional[str] = None


class SearchEnvelope(BaseModel):
    mes: Optional[str] = None


class PlayerEpisode(BaseModel):
    file: Optional[str] = None
    title: Optional[str] = None
    poster: Optional[str] = None


def get_type(label: Optional[str]) -> TvType:
    """
    Classify a release type label.

    "Фильм" means a movie, "ТВ" a series; anything else, including a
    missing label, is treated as an OVA. Matching ignores case.
    """
    text = (label or "").casefold()
    if MOVIE_KEYWORD.casefold() in text:
        return TvType.MOVIE
    if SERIES_KEYWORD.casefold() in text:
        return TvType.ANIME
    return TvType.OVA


def get_track_type(label: Optional[str]) -> str:
    """Type string the metadata API uses for a release type label."""
    return "movie" if MOVIE_KEYWORD.casefold() in (label or "").casefold() else "tv"


class AnilibriaParser:
    """Parser for Anilibria pages and payloads."""

    def __init__(self, base_url: str = "https://anilibria.tv", api_name: str = "Anilibria"):
        """
        Initialize parser.

        Args:
            base_url: Base URL for resolving relative links
            api_name: Adapter name stamped on produced models
        """
        self.base_url = base_url
        self.api_name = api_name

    def unwrap_envelope(self, body: str, envelope: type, field: str) -> str:
        """
        Pull the HTML fragment out of a JSON envelope.

        Raises:
            LoadError: If the body is not JSON or the field is missing
        """
        parsed = try_parse_json(body, envelope)
        fragment = getattr(parsed, field, None) if parsed is not None else None
        if fragment is None:
            raise LoadError("Invalid json responses", plugin_name=self.api_name, details=body[:200])
        return fragment

    def parse_home(self, body: str) -> List[SearchResult]:
        """Parse the catalog endpoint response."""
        return self.parse_listing(self.unwrap_envelope(body, HomeEnvelope, "table"))

    def parse_search(self, body: str) -> List[SearchResult]:
        """Parse the search endpoint response."""
        return self.parse_listing(self.unwrap_envelope(body, SearchEnvelope, "mes"))

    def parse_listing(self, html: str) -> List[SearchResult]:
        """
        Parse every anchor of a listing fragment into a SearchResult.

        Anchors without a ``<span>`` title, or whose link is not an
        http(s) URL, are skipped.
        """
        document = HTMLParser(html, self.base_url)
        results = []

        for anchor in document.select("a"):
            result = self._to_search_result(anchor)
            if result is not None:
                results.append(result)

        logger.debug(f"Parsed {len(results)} listing items")
        return results

    def _to_search_result(self, anchor: Tag) -> Optional[SearchResult]:
        title_tag = anchor.select_one("span")
        if title_tag is None:
            logger.debug("Skipping listing anchor without a title")
            return None

        title = title_tag.get_text(" ", strip=True)
        if not title:
            logger.debug("Skipping listing anchor with an empty title")
            return None

        href = URLHelper.fix_url(str(anchor.get("href") or ""), self.base_url)
        image = anchor.select_one("img")
        poster = element_attr(image, "src", self.base_url) if image is not None else ""

        try:
            return SearchResult(
                title=title,
                url=href,
                api_name=self.api_name,
                type=TvType.ANIME,
                poster_url=poster or None,
                dub_status=[DubStatus.DUBBED],
            )
        except ValidationError as e:
            logger.debug(f"Skipping listing anchor '{title}': {e}")
            return None

    def parse_detail(self, html: str) -> Optional[Dict[str, Any]]:
        """
        Extract the release fields from a detail page.

        Returns:
            Dictionary of parsed fields, or None when the page has no title
        """
        document = HTMLParser(html, self.base_url)

        heading = document.select_one("h1.release-title")
        if heading is None:
            return None
        title = " ".join(heading.get_text(" ").split())
        if not title:
            return None

        type_label = TextCleaner.substring_before(
            document.text_after_label("div#xreleaseInfo", TYPE_LABEL) or "", ","
        ).strip()

        season = document.element_after_label("div#xreleaseInfo", SEASON_LABEL)
        year = TextCleaner.digits_to_int(season.get_text() if season is not None else None)

        return {
            "title": title,
            "poster": URLHelper.fix_url_null(document.find_attr("img#adminPoster", "src"), self.base_url),
            "track_title": self._track_title(document, title),
            "type_label": type_label,
            "type": get_type(type_label),
            "track_type": get_track_type(type_label),
            "year": year,
            "plot": document.find_all_text("p.detail-description") or None,
            "tags": TextCleaner.split_tags(document.text_after_label("div#xreleaseInfo", GENRES_LABEL)),
            "episodes": self.parse_episodes(document),
        }

    @staticmethod
    def _track_title(document: HTMLParser, title: str) -> str:
        # The original-language title follows the <br> in the heading
        line_break = document.select_one("h1.release-title br")
        if line_break is not None:
            sibling = line_break.next_sibling
            if sibling is not None:
                text = sibling.get_text() if isinstance(sibling, Tag) else str(sibling)
                if text.strip():
                    return text.strip()
        return TextCleaner.substring_after(title, "/").strip()

    def parse_episodes(self, document: HTMLParser) -> List[Episode]:
        """
        Read the episode playlist embedded in the player script.

        A page without the script, or with a playlist that is not valid
        JSON, has no episodes.
        """
        script = document.find_script(PLAYER_MARKER)
        if script is None:
            return []

        playlist = TextCleaner.substring_before(TextCleaner.substring_after(script, "file:["), "],")
        entries = try_parse_json(f"[{playlist}]", List[PlayerEpisode])
        if entries is None:
            logger.debug("Player playlist could not be parsed")
            return []

        episodes = []
        for entry in entries:
            if not entry.file or not entry.title:
                continue
            episodes.append(Episode(
                data=entry.file,
                name=entry.title,
                poster_url=URLHelper.fix_url_null(entry.poster, self.base_url),
            ))
        return episodes

    def parse_links(self, data: str, referer: str) -> List[ExtractorLink]:
        """
        Split an episode reference into one link per ``[quality]url`` token.

        Tokens keep their order; a token without a quality tag yields a
        link of unknown quality. Blank tokens are skipped.
        """
        links = []
        for token in (part.strip() for part in data.split(",")):
            match = QUALITY_TAG.search(token)
            quality = match.group(1) if match else None

            link = token
            if quality is not None:
                link = link.removeprefix(f"[{quality}]")
            link = link.strip()
            if not link:
                continue
            if link.startswith("//"):
                link = f"https:{link}"

            links.append(ExtractorLink(
                source=self.api_name,
                name=self.api_name,
                url=link,
                referer=referer,
                quality=QualityExtractor.from_name(quality),
                is_m3u8=True,
            ))
        return links


__all__ = [
    "AnilibriaParser",
    "HomeEnvelope",
    "SearchEnvelope",
    "PlayerEpisode",
    "get_type",
    "get_track_type",
]
