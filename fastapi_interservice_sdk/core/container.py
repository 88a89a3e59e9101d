"""
Dependency injection container.
"""

import inspect
import logging
from typing import Any, Dict, Type, TypeVar, Optional, Callable, List
from dataclasses import dataclass
from enum import Enum


T = TypeVar('T')


class LifecycleScope(Enum):
    """Dependency lifecycle scopes."""
    SINGLETON = "singleton"
    TRANSIENT = "transient"
    SCOPED = "scoped"


@dataclass
class DependencyRegistration:
    """Registration information for a dependency."""
    dependency_type: Type
    implementation: Optional[Type] = None
    factory: Optional[Callable[[], Any]] = None
    scope: LifecycleScope = LifecycleScope.SINGLETON


class DependencyContainer:
    """
    Dependency injection container.

    Provides:
    - Service registration and resolution
    - Lifecycle management (singleton, transient, scoped)
    - Circular dependency detection
    """

    def __init__(self):
        """Initialize the dependency container."""
        self.logger = logging.getLogger("sdk.container")
        self._registrations: Dict[Type, DependencyRegistration] = {}
        self._singletons: Dict[Type, Any] = {}
        self._scoped_instances: Dict[str, Dict[Type, Any]] = {}
        self._current_scope: Optional[str] = None
        self._resolution_stack: List[Type] = []

    def register_singleton(self, interface: Type[T], implementation: Type[T]) -> None:
        """Register a dependency created once and shared."""
        self._register(interface, implementation=implementation, scope=LifecycleScope.SINGLETON)

    def register_transient(self, interface: Type[T], implementation: Type[T]) -> None:
        """Register a dependency created on every resolution."""
        self._register(interface, implementation=implementation, scope=LifecycleScope.TRANSIENT)

    def register_scoped(self, interface: Type[T], implementation: Type[T]) -> None:
        """Register a dependency created once per scope."""
        self._register(interface, implementation=implementation, scope=LifecycleScope.SCOPED)

    def register_factory(
        self,
        interface: Type[T],
        factory: Callable[[], T],
        scope: LifecycleScope = LifecycleScope.SINGLETON
    ) -> None:
        """
        Register a factory function for creating dependencies.

        Args:
            interface: Interface type
            factory: Factory function
            scope: Lifecycle scope
        """
        self._register(interface, factory=factory, scope=scope)

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """Register an already created singleton."""
        self._register(interface, implementation=type(instance), scope=LifecycleScope.SINGLETON)
        self._singletons[interface] = instance

    def _register(self, interface: Type, **kwargs) -> None:
        self._registrations[interface] = DependencyRegistration(dependency_type=interface, **kwargs)
        self._singletons.pop(interface, None)
        self.logger.debug(f"Registered {kwargs['scope'].value}: {interface.__name__}")

    def is_registered(self, interface: Type) -> bool:
        return interface in self._registrations

    def resolve(self, interface: Type[T], scope_id: Optional[str] = None) -> T:
        """
        Resolve a dependency.

        Args:
            interface: Interface type to resolve
            scope_id: Scope for scoped dependencies; the current scope when omitted

        Returns:
            Instance of the requested type

        Raises:
            ValueError: If dependency not registered or circular dependency detected
        """
        if interface in self._resolution_stack:
            cycle = " -> ".join([t.__name__ for t in self._resolution_stack] + [interface.__name__])
            raise ValueError(f"Circular dependency detected: {cycle}")

        if interface not in self._registrations:
            raise ValueError(f"Dependency not registered: {interface.__name__}")

        registration = self._registrations[interface]

        if registration.scope == LifecycleScope.SINGLETON:
            if interface not in self._singletons:
                self._singletons[interface] = self._create_instance(interface, registration)
            return self._singletons[interface]

        if registration.scope == LifecycleScope.SCOPED:
            scope_id = scope_id or self._current_scope
            if scope_id is None:
                raise ValueError("No active scope for scoped dependency resolution")
            scope_instances = self._scoped_instances.setdefault(scope_id, {})
            if interface not in scope_instances:
                scope_instances[interface] = self._create_instance(interface, registration)
            return scope_instances[interface]

        return self._create_instance(interface, registration)

    def _create_instance(self, interface: Type[T], registration: DependencyRegistration) -> T:
        """Create instance using factory or constructor."""
        self._resolution_stack.append(interface)

        try:
            if registration.factory:
                instance = registration.factory()
            else:
                instance = registration.implementation()

            self.logger.debug(f"Created instance: {interface.__name__}")
            return instance
        finally:
            self._resolution_stack.pop()

    def begin_scope(self, scope_id: str) -> None:
        """
        Begin a new dependency scope.

        Args:
            scope_id: Unique identifier for the scope
        """
        self._current_scope = scope_id
        self._scoped_instances.setdefault(scope_id, {})
        self.logger.debug(f"Began scope: {scope_id}")

    def end_scope(self, scope_id: str) -> None:
        """
        End a dependency scope and drop its instances.

        Args:
            scope_id: Scope identifier to end
        """
        self._scoped_instances.pop(scope_id, None)

        if self._current_scope == scope_id:
            self._current_scope = None

        self.logger.debug(f"Ended scope: {scope_id}")

    async def shutdown(self) -> None:
        """Close singletons exposing ``aclose`` or ``close`` and drop them."""
        for interface, instance in list(self._singletons.items()):
            close = getattr(instance, "aclose", None) or getattr(instance, "close", None)
            if close is None:
                continue
            result = close()
            if inspect.isawaitable(result):
                await result
            self.logger.debug(f"Closed singleton: {interface.__name__}")

        self._singletons.clear()

    def get_registration_info(self) -> Dict[str, Dict[str, Any]]:
        """
        Get information about all registered dependencies.

        Returns:
            Dictionary with registration information
        """
        info = {}
        for interface, registration in self._registrations.items():
            info[interface.__name__] = {
                "implementation": registration.implementation.__name__ if registration.implementation else "Factory",
                "scope": registration.scope.value,
                "is_singleton_created": interface in self._singletons
            }
        return info

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._registrations.clear()
        self._singletons.clear()
        self._scoped_instances.clear()
        self._current_scope = None
        self.logger.info("Dependency container cleared")


_container_instance: Optional[DependencyContainer] = None


def get_container() -> DependencyContainer:
    """Get the global container instance."""
    global _container_instance
    if _container_instance is None:
        _container_instance = DependencyContainer()
    return _container_instance
