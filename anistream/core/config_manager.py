"""
Configuration Manager - JSON-based settings and plugin configuration management.

This module provides centralized configuration management for AniStream,
handling user preferences and per-source plugin settings with validation
and default value management.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union
from threading import Lock

from pydantic import ValidationError

from anistream.core.config_defaults import get_default_settings, get_default_sources
from anistream.core.config_schemas import AppSettings, SourcesConfig, SourceConfig
from anistream.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages application configuration with JSON persistence and validation.

    Settings live in ``settings.json`` and source plugin configuration in
    ``sources.json``. Missing files are created with defaults; corrupt
    files are backed up and replaced.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_dir: Directory containing configuration files.
                       Defaults to './config' if not specified.
        """
        self.config_dir = Path(config_dir or "config")
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._settings_file = self.config_dir / "settings.json"
        self._sources_file = self.config_dir / "sources.json"

        self._lock = Lock()
        self._settings: Optional[AppSettings] = None
        self._sources: Optional[SourcesConfig] = None

        self._load_configurations()

    def _load_configurations(self) -> None:
        """Load all configuration files with error handling."""
        try:
            self._settings = self._load_settings()
            self._sources = self._load_sources()
            logger.debug("Configuration loaded from %s", self.config_dir)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}", str(self.config_dir))

    def _load_settings(self) -> AppSettings:
        """Load and validate application settings."""
        if not self._settings_file.exists():
            logger.info("Settings file not found, creating default configuration")
            settings = get_default_settings()
            self._save_settings(settings)
            return settings

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return AppSettings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Invalid settings file, using defaults: {e}")
            backup_path = self._settings_file.with_suffix('.json.backup')
            self._settings_file.replace(backup_path)
            logger.info(f"Corrupted settings backed up to {backup_path}")

            settings = get_default_settings()
            self._save_settings(settings)
            return settings

    def _load_sources(self) -> SourcesConfig:
        """Load and validate sources configuration."""
        if not self._sources_file.exists():
            logger.info("Sources file not found, creating default configuration")
            sources = get_default_sources()
            self._save_sources(sources)
            return sources

        try:
            with open(self._sources_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return SourcesConfig.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Invalid sources file, using defaults: {e}")
            backup_path = self._sources_file.with_suffix('.json.backup')
            self._sources_file.replace(backup_path)
            logger.info(f"Corrupted sources backed up to {backup_path}")

            sources = get_default_sources()
            self._save_sources(sources)
            return sources

    def _write_atomic(self, target: Path, payload: Dict[str, Any]) -> None:
        temp_file = target.with_suffix('.tmp')
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            temp_file.replace(target)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise ConfigurationError(f"Failed to save {target.name}: {e}", str(target))

    def _save_settings(self, settings: AppSettings) -> None:
        """Save settings to file with atomic write."""
        self._write_atomic(self._settings_file, settings.model_dump(mode='json'))
        logger.debug("Settings saved successfully")

    def _save_sources(self, sources: SourcesConfig) -> None:
        """Save sources configuration to file with atomic write."""
        self._write_atomic(self._sources_file, sources.model_dump(mode='json'))
        logger.debug("Sources configuration saved successfully")

    @property
    def settings(self) -> AppSettings:
        """Get current application settings (thread-safe)."""
        with self._lock:
            if self._settings is None:
                self._settings = self._load_settings()
            return self._settings

    @property
    def sources(self) -> SourcesConfig:
        """Get current sources configuration (thread-safe)."""
        with self._lock:
            if self._sources is None:
                self._sources = self._load_sources()
            return self._sources

    def update_setting(self, key_path: str, value: Any) -> None:
        """
        Update a specific setting using dot notation.

        Args:
            key_path: Dot-separated path to the setting (e.g., 'ui.color_theme')
            value: New value for the setting

        Raises:
            ConfigurationError: If key path is invalid or value is invalid
        """
        with self._lock:
            if self._settings is None:
                raise ConfigurationError("Settings not loaded")

            settings_dict = self._settings.model_dump()

            keys = key_path.split('.')
            current = settings_dict

            for key in keys[:-1]:
                if not isinstance(current.get(key), dict):
                    raise ConfigurationError(f"Invalid setting path: {key_path}")
                current = current[key]

            final_key = keys[-1]
            if final_key not in current:
                raise ConfigurationError(f"Invalid setting key: {final_key}")

            current[final_key] = value

            try:
                updated_settings = AppSettings.model_validate(settings_dict)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid setting value: {e}", str(self._settings_file))

            self._settings = updated_settings
            self._save_settings(updated_settings)
            logger.info(f"Setting updated: {key_path} = {value}")

    def get_setting(self, key_path: str, default: Any = None) -> Any:
        """
        Get a specific setting using dot notation.

        Args:
            key_path: Dot-separated path to the setting
            default: Default value if setting not found

        Returns:
            The setting value or default
        """
        with self._lock:
            if self._settings is None:
                return default

            current: Any = self._settings.model_dump()

            try:
                for key in key_path.split('.'):
                    current = current[key]
                return current
            except (KeyError, TypeError):
                return default

    def update_source_config(self, source_name: str, config: Dict[str, Any]) -> None:
        """
        Update configuration for a specific source.

        Args:
            source_name: Name of the source plugin
            config: Fields of SourceConfig to overwrite

        Raises:
            ConfigurationError: If configuration is invalid
        """
        with self._lock:
            if self._sources is None:
                raise ConfigurationError("Sources configuration not loaded")

            sources_dict = self._sources.model_dump()
            sources_dict['sources'].setdefault(source_name, {}).update(config)

            try:
                updated_sources = SourcesConfig.model_validate(sources_dict)
            except ValidationError as e:
                raise ConfigurationError(f"Invalid source configuration: {e}", str(self._sources_file))

            self._sources = updated_sources
            self._save_sources(updated_sources)
            logger.info(f"Source configuration updated: {source_name}")

    def enable_source(self, source_name: str) -> None:
        """Enable a source plugin."""
        self.update_source_config(source_name, {"enabled": True})

    def disable_source(self, source_name: str) -> None:
        """Disable a source plugin."""
        self.update_source_config(source_name, {"enabled": False})

    def get_enabled_sources(self) -> Dict[str, SourceConfig]:
        """Get all enabled source configurations sorted by priority."""
        return self.sources.get_enabled_sources()

    def reset_to_defaults(self) -> None:
        """Reset all configuration to default values."""
        with self._lock:
            logger.warning("Resetting configuration to defaults")
            self._settings = get_default_settings()
            self._sources = get_default_sources()
            self._save_settings(self._settings)
            self._save_sources(self._sources)


__all__ = ["ConfigManager"]
