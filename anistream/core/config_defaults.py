"""
Configuration Defaults - Default configuration templates.

This module builds the default settings and sources documents written
the first time AniStream runs against an empty configuration directory.
"""

import json
from pathlib import Path

from anistream.core.config_schemas import AppSettings, SourcesConfig, SourceConfig


def get_default_settings() -> AppSettings:
    """Get default application settings."""
    return AppSettings()


def get_default_sources() -> SourcesConfig:
    """
    Get default sources configuration.

    Returns:
        SourcesConfig with the bundled Anilibria adapter enabled
    """
    sources_config = SourcesConfig()

    anilibria_source = SourceConfig(
        enabled=True,
        priority=1,
        name="Anilibria",
        description="Russian anime dubs from anilibria.tv",
        config={
            "base_url": "https://anilibria.tv",
            "rate_limit": 0.5,
            "timeout": 30,
            "enable_tracker": True,
        }
    )

    sources_config.add_source("anilibria", anilibria_source)
    return sources_config


def create_default_config_files(config_dir: Path) -> None:
    """
    Create default configuration files in the specified directory.

    Existing files are left untouched.

    Args:
        config_dir: Directory to create configuration files in
    """
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / "settings.json"
    if not settings_file.exists():
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(get_default_settings().model_dump(), f, indent=2, ensure_ascii=False)

    sources_file = config_dir / "sources.json"
    if not sources_file.exists():
        with open(sources_file, 'w', encoding='utf-8') as f:
            json.dump(get_default_sources().model_dump(), f, indent=2, ensure_ascii=False)


__all__ = [
    "get_default_settings",
    "get_default_sources",
    "create_default_config_files",
]
