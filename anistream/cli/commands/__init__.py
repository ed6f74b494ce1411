"""
CLI Commands - Individual command implementations.

This module contains the command implementations for browsing, searching,
loading titles, resolving links, and managing sources and configuration.
"""

from anistream.cli.commands import config, home, links, load, search, sources

__all__ = ["config", "home", "links", "load", "search", "sources"]
