"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings and plugin configurations using Pydantic models.
"""

import logging
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


logger = logging.getLogger(__name__)


class HttpSettings(BaseModel):
    """Network settings applied to every adapter unless overridden."""

    timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Network timeout in seconds"
    )
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
        ),
        description="User agent string for requests"
    )


class UISettings(BaseModel):
    """User interface configuration settings."""

    color_theme: Literal["default", "dark", "light", "colorful"] = Field(
        default="default",
        description="Color theme for the CLI interface"
    )


class SearchSettings(BaseModel):
    """Search-related configuration settings."""

    max_results_per_source: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Maximum results to display per source"
    )
    min_query_length: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Minimum search query length"
    )


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    file: Optional[str] = Field(
        default=None,
        description="Optional log file name"
    )


class AppSettings(BaseModel):
    """Main application settings container."""

    http: HttpSettings = Field(default_factory=HttpSettings)
    ui: UISettings = Field(default_factory=UISettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class SourceConfig(BaseModel):
    """Configuration for an individual source plugin."""

    enabled: bool = Field(
        default=False,
        description="Whether the source is enabled"
    )
    priority: int = Field(
        default=1,
        ge=1,
        le=100,
        description="Source priority (lower numbers = higher priority)"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name for the source"
    )
    description: Optional[str] = Field(
        default=None,
        description="Description of the source"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Source-specific configuration"
    )

    @field_validator('config')
    @classmethod
    def validate_config(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate source-specific configuration."""
        if 'rate_limit' in v and not isinstance(v['rate_limit'], (int, float)):
            raise ValueError("rate_limit must be a number")

        if 'timeout' in v and (not isinstance(v['timeout'], int) or v['timeout'] < 1):
            raise ValueError("timeout must be a positive integer")

        return v


class GlobalSourceConfig(BaseModel):
    """Global configuration for source management."""

    max_concurrent_plugins: int = Field(
        default=5,
        ge=1,
        le=20,
        description="Maximum number of plugins to query concurrently"
    )


class SourcesConfig(BaseModel):
    """Sources configuration container."""

    sources: Dict[str, SourceConfig] = Field(
        default_factory=dict,
        description="Individual source configurations"
    )
    global_config: GlobalSourceConfig = Field(
        default_factory=GlobalSourceConfig,
        description="Global source management settings"
    )

    @model_validator(mode='after')
    def validate_source_priorities(self) -> 'SourcesConfig':
        """Warn about duplicate source priorities."""
        priorities = {}
        for name, config in self.sources.items():
            if config.priority in priorities:
                logger.warning(
                    f"Duplicate priority {config.priority} for sources "
                    f"{name} and {priorities[config.priority]}"
                )
            priorities[config.priority] = name

        return self

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Get all enabled sources sorted by priority."""
        enabled = {
            name: config for name, config in self.sources.items()
            if config.enabled
        }

        # Sort by priority (lower numbers first)
        return dict(sorted(
            enabled.items(),
            key=lambda item: item[1].priority
        ))

    def add_source(self, name: str, config: SourceConfig) -> None:
        """Add a new source configuration."""
        self.sources[name] = config

    def get_source(self, name: str) -> Optional[SourceConfig]:
        """Get configuration for a specific source."""
        return self.sources.get(name)


# Export all configuration models
__all__ = [
    "HttpSettings",
    "UISettings",
    "SearchSettings",
    "LoggingSettings",
    "AppSettings",
    "SourceConfig",
    "GlobalSourceConfig",
    "SourcesConfig",
]
