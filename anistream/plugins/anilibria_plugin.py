"""
Anilibria Plugin Entry Point

This module serves as the entry point for the Anilibria plugin,
importing the main plugin class from the anilibria subdirectory.
"""

from anistream.plugins.anilibria.plugin import AnilibriaPlugin

# Export the plugin class for discovery
__all__ = ["AnilibriaPlugin"]
