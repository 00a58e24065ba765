"""
Application bootstrap for rmlwrap.

Registers settings and a configured logger in the DI container. Host
applications call this once at startup; the library works without it,
falling back to a NullLogger.
"""

from __future__ import annotations

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .settings import RMLWrapSettings, load_settings

_initialized = False


def bootstrap(settings: RMLWrapSettings | None = None) -> ServiceContainer:
    """
    Bootstrap rmlwrap services.

    Args:
        settings: Settings to register (loaded from config/env if omitted)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    settings = settings or load_settings()
    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: RMLWrapSettings) -> None:
    """Register settings and logger."""
    from ..services.logging import RMLWrapLogger

    container.register_singleton(RMLWrapSettings, implementation=settings)

    def create_logger() -> ILogger:
        return RMLWrapLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
            file_path=settings.logging.resolved_file_path(),
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def is_initialized() -> bool:
    """Check if bootstrap has been called."""
    return _initialized


def reset() -> None:
    """Reset bootstrap state and the global container (for testing)."""
    global _initialized
    _initialized = False
    ServiceContainer.reset()
