"""
Anilibria Plugin Configuration

This module handles configuration validation and defaults for the Anilibria plugin.
"""

import logging
from typing import Dict, Any, Optional

from pydantic import BaseModel, Field, field_validator

from anistream.plugins.common import DEFAULT_USER_AGENT


logger = logging.getLogger(__name__)


class AnilibriaConfig(BaseModel):
    """Configuration model for Anilibria plugin."""

    base_url: str = Field(default="https://anilibria.tv", description="Site base URL")
    tracker_url: str = Field(
        default="https://api.consumet.org/meta/anilist",
        description="Metadata lookup endpoint used for enrichment"
    )
    enable_tracker: bool = Field(default=True, description="Enrich detail records from the metadata API")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    rate_limit: float = Field(default=0.5, description="Minimum seconds between requests")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User agent string for requests")

    @field_validator('base_url', 'tracker_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if not v.startswith(('http://', 'https://')):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip('/')

    @field_validator('timeout')
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v < 5:
            raise ValueError("Timeout must be at least 5 seconds")
        return v

    @field_validator('rate_limit')
    @classmethod
    def validate_rate_limit(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Rate limit cannot be negative")
        return v


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for Anilibria plugin."""
    return AnilibriaConfig().model_dump()


def merge_with_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Merge provided config with defaults.

    Args:
        config: User configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    merged = get_default_config()
    if config:
        merged.update(config)
    return merged


__all__ = ["AnilibriaConfig", "get_default_config", "merge_with_defaults"]
