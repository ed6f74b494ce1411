"""
Progress Indicators - Status spinners for long-running operations.
"""

from contextlib import contextmanager

from rich.status import Status

from anistream.ui.console import get_console


@contextmanager
def status_spinner(message: str, spinner: str = "dots"):
    """Simple status spinner context manager."""
    status = Status(message, spinner=spinner, console=get_console())

    try:
        status.start()
        yield status
    finally:
        status.stop()


__all__ = ["status_spinner"]
