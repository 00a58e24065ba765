"""Service interfaces for rmlwrap."""

from .logger import ILogger

__all__ = ["ILogger"]
