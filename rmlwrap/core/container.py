"""
Dependency injection container for rmlwrap.

Uses dependency-injector providers for singleton and transient lifetimes
with interface-based resolution. Applications populate it through
``bootstrap()``; tests swap registrations with ``override()``.
"""

from collections.abc import Callable
from typing import Optional, TypeVar

from dependency_injector import providers

T = TypeVar("T")


class ServiceContainer:
    """Dependency injection container for rmlwrap services."""

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with no registrations."""
        self._providers: dict[type, providers.Provider] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface/protocol type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(
        self,
        interface: type[T],
        factory: Callable[..., T],
    ) -> None:
        """
        Register a transient service (new instance per resolve).

        Args:
            interface: The interface/protocol type
            factory: Factory function or class
        """
        self._providers[interface] = providers.Factory(factory)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """Override a registered provider (useful for testing)."""
        self._providers[interface] = provider

    def is_registered(self, interface: type) -> bool:
        return interface in self._providers


def get_container() -> ServiceContainer:
    """Get the global service container."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service from the global container."""
    return get_container().try_resolve(interface)
