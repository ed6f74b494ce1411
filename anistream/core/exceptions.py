"""
Core Exceptions - Custom exception classes for AniStream.

This module defines the error taxonomy shared by the site adapters,
the plugin manager and the command line interface.
"""

from typing import Optional, Any


class AniStreamError(Exception):
    """Base exception class for all AniStream-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize AniStream error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AniStreamError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(AniStreamError):
    """Raised when plugin-related errors occur."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize plugin error.

        Args:
            message: Error description
            plugin_name: Name of the problematic plugin
            details: Additional error context
        """
        super().__init__(message, details)
        self.plugin_name = plugin_name


class LoadError(PluginError):
    """Raised when an upstream payload is missing or cannot be parsed."""

    def __init__(
        self,
        message: str = "Invalid json responses",
        plugin_name: Optional[str] = None,
        url: Optional[str] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message, plugin_name, details)
        self.url = url


class NetworkError(AniStreamError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


# Export all exception classes
__all__ = [
    "AniStreamError",
    "ConfigurationError",
    "PluginError",
    "LoadError",
    "NetworkError",
]
