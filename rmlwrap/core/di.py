"""
Dependency injection helpers for rmlwrap.

Lets services fall back to a default implementation when the host
application never called ``bootstrap()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface/protocol type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from rmlwrap.core.interfaces.logger import ILogger
        >>> from rmlwrap.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    try:
        from .container import get_container

        instance = get_container().try_resolve(interface)
        if instance is not None:
            return instance
    except Exception:
        # Registered factory failed; the default keeps the library usable
        pass

    return default_factory()


def is_bootstrapped() -> bool:
    """Check whether bootstrap() has populated the container."""
    from .bootstrap import is_initialized

    return is_initialized()
