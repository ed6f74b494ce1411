"""
Plugin Manager - Plugin discovery and dispatch.

This module discovers site adapters, instantiates them with their
configuration from ``sources.json`` and routes the four adapter
operations to them.
"""

import asyncio
import importlib
import inspect
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

from anistream.core.config_manager import ConfigManager
from anistream.core.exceptions import PluginError
from anistream.core.models import (
    ExtractorLink,
    HomePageResponse,
    LoadResponse,
    SearchResult,
    SubtitleFile,
)
from anistream.plugins.base import BasePlugin


logger = logging.getLogger(__name__)

PLUGIN_SUFFIX = "_plugin"


class PluginManager:
    """
    Manages site adapters with discovery, loading and dispatch.

    Plugins are modules named ``<name>_plugin.py`` in the plugins package;
    each exports one concrete BasePlugin subclass. Embedding code and tests
    can also hand in ready-made instances with ``register_plugin``.
    """

    def __init__(self, config_manager: ConfigManager, plugins_dir: Optional[Path] = None):
        """
        Initialize plugin manager.

        Args:
            config_manager: Configuration manager instance
            plugins_dir: Directory containing plugin modules (defaults to anistream/plugins)
        """
        self.config_manager = config_manager
        self.plugins_dir = plugins_dir or Path(__file__).parent.parent / "plugins"

        self._available_plugins: Dict[str, Type[BasePlugin]] = {}
        self._loaded_plugins: Dict[str, BasePlugin] = {}
        self._plugin_errors: Dict[str, Exception] = {}

        self._discovery_complete = False

    def discover_plugins(self) -> None:
        """
        Discover available plugins in the plugins directory.

        Import failures are recorded per plugin and do not stop discovery.
        """
        if not self.plugins_dir.exists():
            logger.warning(f"Plugins directory does not exist: {self.plugins_dir}")
            return

        logger.debug(f"Discovering plugins in {self.plugins_dir}")

        self._available_plugins.clear()
        self._plugin_errors.clear()

        for plugin_file in sorted(self.plugins_dir.glob(f"*{PLUGIN_SUFFIX}.py")):
            plugin_name = plugin_file.stem[:-len(PLUGIN_SUFFIX)]
            try:
                self._discover_plugin_module(plugin_name, plugin_file.stem)
            except PluginError as e:
                self._plugin_errors[plugin_name] = e
                logger.error(f"Failed to discover plugin {plugin_name}: {e}")

        self._discovery_complete = True
        logger.debug(f"Plugin discovery complete: {len(self._available_plugins)} plugins found")

    def _discover_plugin_module(self, plugin_name: str, module_stem: str) -> None:
        module_name = f"anistream.plugins.{module_stem}"

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise PluginError(f"Failed to import plugin module {module_name}: {e}", plugin_name=plugin_name)

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (issubclass(obj, BasePlugin) and
                    obj is not BasePlugin and
                    not inspect.isabstract(obj)):
                self._available_plugins[plugin_name] = obj
                logger.debug(f"Discovered plugin: {plugin_name} ({obj.__name__})")
                return

        raise PluginError(f"No valid plugin class found in {module_name}", plugin_name=plugin_name)

    @property
    def available_plugins(self) -> List[str]:
        """Names of discovered plugins."""
        if not self._discovery_complete:
            self.discover_plugins()
        return sorted(self._available_plugins)

    def register_plugin(self, plugin_name: str, plugin: BasePlugin) -> None:
        """
        Register an already constructed plugin instance under ``plugin_name``.

        The instance bypasses discovery and configuration. Single-plugin
        calls reach it directly; ``search_all`` includes it once its source
        is enabled.
        """
        if not self._discovery_complete:
            self.discover_plugins()
        self._available_plugins[plugin_name] = type(plugin)
        self._loaded_plugins[plugin_name] = plugin

    def load_plugin(self, plugin_name: str) -> Optional[BasePlugin]:
        """
        Load a specific plugin by name.

        Args:
            plugin_name: Name of the plugin to load

        Returns:
            Loaded plugin instance or None if loading failed
        """
        if plugin_name in self._loaded_plugins:
            return self._loaded_plugins[plugin_name]

        if plugin_name not in self._available_plugins:
            if not self._discovery_complete:
                self.discover_plugins()

            if plugin_name not in self._available_plugins:
                logger.error(f"Plugin not found: {plugin_name}")
                return None

        source_config = self.config_manager.sources.get_source(plugin_name)
        if source_config is None:
            logger.warning(f"No configuration found for plugin {plugin_name}")
            config_dict: Dict[str, Any] = {}
        else:
            config_dict = dict(source_config.config)

        config_dict.setdefault("timeout", self.config_manager.settings.http.timeout)
        config_dict.setdefault("user_agent", self.config_manager.settings.http.user_agent)

        try:
            plugin_instance = self._available_plugins[plugin_name](config=config_dict)
        except (PluginError, TypeError, ValueError) as e:
            self._plugin_errors[plugin_name] = e
            logger.error(f"Failed to load plugin {plugin_name}: {e}")
            return None

        self._loaded_plugins[plugin_name] = plugin_instance
        logger.debug(f"Loaded plugin: {plugin_name}")
        return plugin_instance

    def get_plugin(self, plugin_name: str) -> BasePlugin:
        """
        Load a plugin or fail.

        Raises:
            PluginError: If the plugin is unknown or cannot be loaded
        """
        plugin = self.load_plugin(plugin_name)
        if plugin is None:
            raise PluginError(f"Plugin {plugin_name} is not available", plugin_name=plugin_name)
        return plugin

    def get_active_plugins(self) -> Dict[str, BasePlugin]:
        """
        Get all enabled and loadable plugins, in priority order.

        Returns:
            Dictionary of plugin name to plugin instance
        """
        active_plugins = {}
        for plugin_name in self.config_manager.get_enabled_sources():
            plugin = self.load_plugin(plugin_name)
            if plugin is not None:
                active_plugins[plugin_name] = plugin
        return active_plugins

    async def get_main_page(self, plugin_name: str, page: int = 1, category: Optional[str] = None) -> HomePageResponse:
        """
        Fetch a homepage listing page from a plugin.

        Args:
            plugin_name: Name of the plugin
            page: Page number, starting at 1
            category: Category key or display name (defaults to the first category)

        Raises:
            PluginError: If the plugin or the category is unavailable
            LoadError: If the listing cannot be parsed
        """
        plugin = self.get_plugin(plugin_name)
        if not plugin.metadata.has_main_page or not plugin.main_page:
            raise PluginError(f"Plugin {plugin_name} has no homepage", plugin_name=plugin_name)

        if category is None:
            request = plugin.main_page[0]
        else:
            try:
                request = plugin.get_main_page_request(category)
            except KeyError:
                choices = ", ".join(f"{r.data} ({r.name})" for r in plugin.main_page)
                raise PluginError(
                    f"Unknown category '{category}' for {plugin_name}; choose one of: {choices}",
                    plugin_name=plugin_name
                )

        return await plugin.get_main_page(page, request)

    async def search(self, plugin_name: str, query: str) -> List[SearchResult]:
        """Search a single plugin. Errors propagate."""
        plugin = self.get_plugin(plugin_name)
        results = await plugin.search(query)
        logger.debug(f"Plugin {plugin_name} returned {len(results)} results")
        return results

    async def search_all(
        self,
        query: str,
        max_concurrent: Optional[int] = None
    ) -> Dict[str, List[SearchResult]]:
        """
        Search across all active plugins concurrently.

        A failing plugin is logged and recorded in the plugin status, and
        contributes an empty result list.

        Args:
            query: Search query string
            max_concurrent: Maximum number of concurrent plugin searches

        Returns:
            Dictionary mapping plugin names to their search results
        """
        active_plugins = self.get_active_plugins()

        if not active_plugins:
            logger.warning("No active plugins available for search")
            return {}

        if max_concurrent is None:
            max_concurrent = self.config_manager.sources.global_config.max_concurrent_plugins

        semaphore = asyncio.Semaphore(max_concurrent)

        async def search_plugin(name: str, plugin: BasePlugin) -> Tuple[str, List[SearchResult]]:
            """Search a single plugin with error handling."""
            async with semaphore:
                try:
                    return name, await plugin.search(query)
                except Exception as e:
                    logger.error(f"Search failed for plugin {name}: {e}")
                    self._plugin_errors[name] = e
                    return name, []

        results = await asyncio.gather(*(
            search_plugin(name, plugin)
            for name, plugin in active_plugins.items()
        ))

        search_results = dict(results)
        total_results = sum(len(items) for items in search_results.values())
        logger.info(f"Search complete: {total_results} total results from {len(search_results)} plugins")
        return search_results

    async def load(self, plugin_name: str, url: str) -> Optional[LoadResponse]:
        """Load a detail record from a plugin. Errors propagate."""
        plugin = self.get_plugin(plugin_name)
        return await plugin.load(url)

    async def load_links(
        self,
        plugin_name: str,
        data: str,
        is_casting: bool = False
    ) -> Tuple[List[ExtractorLink], List[SubtitleFile]]:
        """
        Resolve an episode reference and collect the emitted links.

        Returns:
            Links and subtitles in the order the plugin emitted them
        """
        plugin = self.get_plugin(plugin_name)
        links: List[ExtractorLink] = []
        subtitles: List[SubtitleFile] = []

        resolved = await plugin.load_links(data, is_casting, subtitles.append, links.append)
        if not resolved:
            logger.warning(f"Plugin {plugin_name} could not resolve links")

        logger.debug(f"Plugin {plugin_name} emitted {len(links)} links, {len(subtitles)} subtitles")
        return links, subtitles

    def get_plugin_status(self) -> Dict[str, Dict[str, Any]]:
        """
        Get status information for all plugins.

        Returns:
            Dictionary keyed by plugin name
        """
        if not self._discovery_complete:
            self.discover_plugins()

        status = {}
        for name in sorted(set(self._available_plugins) | set(self._plugin_errors)):
            plugin_class = self._available_plugins.get(name)
            source_config = self.config_manager.sources.get_source(name)
            info: Dict[str, Any] = {
                "class": plugin_class.__name__ if plugin_class else None,
                "loaded": name in self._loaded_plugins,
                "enabled": bool(source_config and source_config.enabled),
                "priority": source_config.priority if source_config else None,
                "error": str(self._plugin_errors[name]) if name in self._plugin_errors else None,
            }
            if name in self._loaded_plugins:
                info["metadata"] = self._loaded_plugins[name].metadata.model_dump(mode="json")
            status[name] = info

        return status

    async def cleanup(self) -> None:
        """Clean up all loaded plugins."""
        await asyncio.gather(
            *(plugin.cleanup() for plugin in self._loaded_plugins.values()),
            return_exceptions=True
        )
        self._loaded_plugins.clear()
        logger.debug("Plugin manager cleanup complete")


__all__ = ["PluginManager"]
