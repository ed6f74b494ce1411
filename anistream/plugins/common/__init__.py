"""
Common utilities for plugin development.

This package contains shared utilities and helper functions
used across multiple plugins.
"""

from .http import HttpClient, DEFAULT_USER_AGENT
from .utils import (
    HTMLParser,
    QualityExtractor,
    URLHelper,
    TextCleaner,
    element_attr,
    try_parse_json,
)

__all__ = [
    "HttpClient",
    "DEFAULT_USER_AGENT",
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
    "element_attr",
    "try_parse_json",
]
