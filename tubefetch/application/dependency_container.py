"""
Dependency Injection Container

Holds the service graph built by the app factory. API resources resolve
their collaborators from ``current_app.container``.
"""

import logging
import threading
from typing import Any, Callable, Dict, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

SINGLETON = "singleton"
TRANSIENT = "transient"
OVERRIDE = "override"
NOT_REGISTERED = "not_registered"


class DependencyNotFoundError(Exception):
    """Raised when attempting to resolve an unregistered dependency."""
    pass


class DependencyContainer:
    """
    Registry mapping interface types to instances or factories.

    Singletons are shared instances, transients are built by their factory
    on every ``resolve``. Overrides shadow both and exist so tests can swap
    in doubles without rebuilding the graph.
    """

    def __init__(self):
        self._registrations: Dict[Type, Tuple[str, Any]] = {}
        self._overrides: Dict[Type, Any] = {}
        self._lock = threading.Lock()

    def register_singleton(self, interface: Type[T], implementation: T) -> None:
        """
        Register a shared instance.

        Example:
            container.register_singleton(LookupService, lookup_service)
        """
        self._register(interface, SINGLETON, implementation)

    def register_transient(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Register a factory called on every resolution."""
        self._register(interface, TRANSIENT, factory)

    def resolve(self, interface: Type[T]) -> T:
        """
        Resolve a registered service.

        Args:
            interface: The interface or class type to resolve

        Returns:
            The override, the singleton, or a fresh transient instance

        Raises:
            DependencyNotFoundError: If the interface is not registered
        """
        with self._lock:
            if interface in self._overrides:
                return self._overrides[interface]
            registration = self._registrations.get(interface)

        if registration is None:
            raise DependencyNotFoundError(
                f"No registration found for type: {interface.__name__}"
            )

        kind, target = registration
        # Factories run unlocked so they may resolve other services
        return target() if kind == TRANSIENT else target

    def override(self, interface: Type[T], implementation: T) -> None:
        with self._lock:
            self._overrides[interface] = implementation
        logger.debug(f"Overridden: {interface.__name__}")

    def clear_overrides(self) -> None:
        with self._lock:
            self._overrides.clear()

    def is_registered(self, interface: Type) -> bool:
        return self.get_registration_type(interface) != NOT_REGISTERED

    def get_registration_type(self, interface: Type) -> str:
        """One of 'override', 'singleton', 'transient' or 'not_registered'."""
        with self._lock:
            if interface in self._overrides:
                return OVERRIDE
            registration = self._registrations.get(interface)
        return registration[0] if registration else NOT_REGISTERED

    def singleton_count(self) -> int:
        with self._lock:
            return sum(1 for kind, _ in self._registrations.values() if kind == SINGLETON)

    def _register(self, interface: Type, kind: str, target: Any) -> None:
        with self._lock:
            self._registrations[interface] = (kind, target)
        logger.debug(f"Registered {kind}: {interface.__name__}")
