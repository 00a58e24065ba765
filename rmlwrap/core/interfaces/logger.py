"""
Logger interface for internal diagnostic output.

rmlwrap is a library: it never prints. Diagnostics go through ILogger so the
host application decides whether they reach stderr, a file, or nowhere.
"""

from abc import ABC, abstractmethod
from typing import Any


class ILogger(ABC):
    """Interface for workspace, command and engine diagnostics."""

    @abstractmethod
    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""

    @abstractmethod
    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""

    @abstractmethod
    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""

    @abstractmethod
    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""
