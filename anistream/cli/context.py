"""
CLI Context - Global application context and state management.

This module holds the configuration manager created at startup so that
command modules can reach it without circular imports.
"""

from typing import Optional

from anistream.core import ConfigManager, PluginManager, PluginError


# Global application state
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: Optional[ConfigManager]) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def default_source() -> str:
    """
    Name of the highest-priority enabled source.

    Raises:
        PluginError: If no source is enabled
    """
    enabled = get_config_manager().get_enabled_sources()
    if not enabled:
        raise PluginError("No sources are enabled; enable one with 'anistream sources enable'")
    return next(iter(enabled))


def create_plugin_manager() -> PluginManager:
    """Create a plugin manager bound to the global configuration."""
    return PluginManager(get_config_manager())


__all__ = [
    "get_config_manager",
    "set_config_manager",
    "default_source",
    "create_plugin_manager",
]
