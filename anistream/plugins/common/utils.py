"""
Plugin Utilities - Common helpers for site adapter development.

This module provides the parsing helpers adapters share: HTML selection
with URL resolution, quality inference, URL fixing, small text helpers
and lenient JSON parsing into Pydantic models.
"""

import json
import re
import logging
from typing import Any, List, Optional, Type, TypeVar
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from pydantic import TypeAdapter, ValidationError

from anistream.core.models import Quality


logger = logging.getLogger(__name__)

T = TypeVar("T")


class HTMLParser:
    """Utility class for HTML parsing operations."""

    def __init__(self, html_content: str, base_url: str = ""):
        """
        Initialize HTML parser.

        Args:
            html_content: HTML content to parse
            base_url: Base URL for resolving relative links
        """
        self.soup = BeautifulSoup(html_content or "", 'html.parser')
        self.base_url = base_url

    def select(self, selector: str) -> List[Tag]:
        """Select all elements matching a CSS selector."""
        return self.soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        """Select the first element matching a CSS selector."""
        return self.soup.select_one(selector)

    def find_all_text(self, selector: str, separator: str = " ") -> str:
        """Join the text of every element matching a CSS selector."""
        return separator.join(
            elem.get_text(" ", strip=True) for elem in self.soup.select(selector)
        ).strip()

    def find_attr(self, selector: str, attr: str, default: str = "") -> str:
        """
        Find attribute value using CSS selector.

        ``href`` and ``src`` values are resolved against the base URL.
        """
        element = self.soup.select_one(selector)
        if element is None:
            return default
        return element_attr(element, attr, self.base_url) or default

    def find_script(self, marker: str) -> Optional[str]:
        """Return the body of the first <script> whose text contains ``marker``."""
        for script in self.soup.find_all("script"):
            content = script.string or script.get_text()
            if content and marker in content:
                return content
        return None

    def text_after_label(self, container: str, label: str) -> Optional[str]:
        """
        Text node following a ``<b>label</b>`` inside ``container``.

        Returns None when the label is absent or followed by an element.
        """
        label_tag = self._label(container, label)
        if label_tag is None:
            return None
        sibling = label_tag.next_sibling
        if sibling is None or isinstance(sibling, Tag):
            return None
        return str(sibling)

    def element_after_label(self, container: str, label: str) -> Optional[Tag]:
        """Element following a ``<b>label</b>`` inside ``container``."""
        label_tag = self._label(container, label)
        if label_tag is None:
            return None
        return label_tag.find_next_sibling()

    def _label(self, container: str, label: str) -> Optional[Tag]:
        # Label matching ignores case
        wanted = label.casefold()
        for tag in self.soup.select(f"{container} b"):
            if wanted in tag.get_text().casefold():
                return tag
        return None


def element_attr(element: Tag, attr: str, base_url: str = "") -> str:
    """Attribute of an element, resolving ``href``/``src`` against ``base_url``."""
    value = element.get(attr)
    if isinstance(value, list):
        value = value[0] if value else ""
    if not value:
        return ""
    if attr in ('href', 'src') and base_url:
        return URLHelper.fix_url(value, base_url)
    return value


class QualityExtractor:
    """Utility class for inferring video quality from names and URLs."""

    QUALITY_PATTERNS = {
        Quality.FOUR_K: [r'2160p?', r'4k', r'uhd'],
        Quality.ULTRA: [r'1440p?', r'2k'],
        Quality.HIGH: [r'1080p?', r'fhd', r'full.?hd'],
        Quality.MEDIUM: [r'720p?', r'\bhd\b'],
        Quality.LOW: [r'480p?', r'\bsd\b'],
        Quality.P360: [r'360p?'],
        Quality.P240: [r'240p?'],
        Quality.P144: [r'144p?'],
    }

    @classmethod
    def extract_from_text(cls, text: str) -> List[Quality]:
        """
        Extract quality options from text, best first.

        Args:
            text: Text containing quality information

        Returns:
            List of detected qualities
        """
        text_lower = text.lower()
        detected_qualities = []

        for quality, patterns in cls.QUALITY_PATTERNS.items():
            for pattern in patterns:
                if re.search(pattern, text_lower):
                    detected_qualities.append(quality)
                    break

        return sorted(dict.fromkeys(detected_qualities), key=lambda q: q.height, reverse=True)

    @classmethod
    def from_name(cls, name: Optional[str]) -> Quality:
        """
        Infer a quality from a label such as ``"720p"`` or ``"FHD"``.

        Unrecognised or missing labels map to ``Quality.UNKNOWN``.
        """
        if not name:
            return Quality.UNKNOWN

        match = re.fullmatch(r'\s*(\d{3,4})\s*[pP]?\s*', name)
        if match:
            return Quality.from_height(int(match.group(1)))

        qualities = cls.extract_from_text(name)
        return qualities[0] if qualities else Quality.UNKNOWN


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def fix_url(url: str, base_url: str) -> str:
        """Resolve relative and protocol-relative URLs against ``base_url``."""
        url = url.strip()
        if url.startswith(('http://', 'https://')):
            return url
        if url.startswith('//'):
            return f"https:{url}"
        return urljoin(base_url.rstrip('/') + '/', url)

    @staticmethod
    def fix_url_null(url: Optional[str], base_url: str) -> Optional[str]:
        """Like ``fix_url`` but blank input stays None."""
        if not url or not url.strip():
            return None
        return URLHelper.fix_url(url, base_url)


class TextCleaner:
    """Utility class for cleaning and slicing text content."""

    @staticmethod
    def substring_after(text: str, delimiter: str) -> str:
        """Text after the first ``delimiter``, or the whole text if absent."""
        index = text.find(delimiter)
        return text if index < 0 else text[index + len(delimiter):]

    @staticmethod
    def substring_before(text: str, delimiter: str) -> str:
        """Text before the first ``delimiter``, or the whole text if absent."""
        index = text.find(delimiter)
        return text if index < 0 else text[:index]

    @staticmethod
    def digits_to_int(text: Optional[str]) -> Optional[int]:
        """Concatenate the digits of ``text`` into an int."""
        if not text:
            return None
        digits = "".join(ch for ch in text if ch.isdigit())
        return int(digits) if digits else None

    @staticmethod
    def split_tags(text: Optional[str]) -> List[str]:
        """Comma-separated text into trimmed, non-empty tags."""
        if not text:
            return []
        return [tag.strip() for tag in text.split(",") if tag.strip()]


def try_parse_json(text: Optional[str], model: Type[T]) -> Optional[T]:
    """
    Parse JSON text into ``model`` (a Pydantic model or typing construct).

    Returns None instead of raising when the text is not JSON or does not
    fit the model.
    """
    if text is None:
        return None
    try:
        return TypeAdapter(model).validate_python(json.loads(text))
    except (json.JSONDecodeError, ValidationError, TypeError) as e:
        logger.debug(f"Could not parse JSON as {model}: {e}")
        return None


__all__ = [
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
    "element_attr",
    "try_parse_json",
]
