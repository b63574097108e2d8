"""
Service container used as the registration surface for modules.

Modules register their services here from ``configure_services``. The
container supports singleton and transient lifetimes and accepts classes,
factory functions or ready-made instances as implementations.
"""

from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Callable, Dict, Hashable, Optional, Union

from loguru import logger

ServiceKey = Hashable


class ServiceLifetime(Enum):
    """Service lifetime management options."""
    SINGLETON = auto()  # Single instance shared across application
    TRANSIENT = auto()  # New instance created each time


class ServiceRegistration:
    """Registration information for a service."""

    def __init__(self,
                 service_type: ServiceKey,
                 implementation: Union[Callable[[], Any], Any],
                 lifetime: ServiceLifetime = ServiceLifetime.SINGLETON):
        self.service_type = service_type
        self.implementation = implementation
        self.lifetime = lifetime
        self.instance: Any = None

        # A ready-made instance is always a singleton
        if not callable(implementation):
            self.instance = implementation
            self.lifetime = ServiceLifetime.SINGLETON

    def __repr__(self) -> str:
        return f"ServiceRegistration({_key_name(self.service_type)}, {self.lifetime.name})"


def _key_name(service_type: ServiceKey) -> str:
    return getattr(service_type, '__name__', str(service_type))


class IContainer(ABC):
    """Interface for service containers."""

    @abstractmethod
    def register(self,
                 service_type: ServiceKey,
                 implementation: Union[Callable[[], Any], Any],
                 lifetime: ServiceLifetime = ServiceLifetime.SINGLETON) -> None:
        """
        Register a service with the container.

        Args:
            service_type: Interface, base type or name
            implementation: Implementation class, factory function, or instance
            lifetime: Service lifetime management
        """
        pass

    @abstractmethod
    def register_instance(self, service_type: ServiceKey, instance: Any) -> None:
        """
        Register a specific instance as a singleton.

        Args:
            service_type: Interface, base type or name
            instance: Service instance
        """
        pass

    @abstractmethod
    def resolve(self, service_type: ServiceKey) -> Any:
        """
        Resolve a service instance.

        Raises:
            ServiceNotRegisteredException: If service not registered
            ServiceResolutionException: If service cannot be created
        """
        pass

    @abstractmethod
    def try_resolve(self, service_type: ServiceKey) -> Optional[Any]:
        """Resolve a service instance, returning None when unavailable."""
        pass

    @abstractmethod
    def is_registered(self, service_type: ServiceKey) -> bool:
        """Check if a service is registered."""
        pass


class ServiceNotRegisteredException(Exception):
    """Raised when trying to resolve an unregistered service."""
    pass


class ServiceResolutionException(Exception):
    """Raised when service resolution fails."""
    pass


class Container(IContainer):
    """
    Lightweight service container.

    Services are keyed by type or by any hashable name. Registering the
    same key twice replaces the earlier registration.
    """

    def __init__(self) -> None:
        self._services: Dict[ServiceKey, ServiceRegistration] = {}

    def register(self,
                 service_type: ServiceKey,
                 implementation: Union[Callable[[], Any], Any],
                 lifetime: ServiceLifetime = ServiceLifetime.SINGLETON) -> None:
        """Register a service with the container."""
        if service_type in self._services:
            logger.debug(f"Replacing registration for {_key_name(service_type)}")

        self._services[service_type] = ServiceRegistration(
            service_type=service_type,
            implementation=implementation,
            lifetime=lifetime,
        )
        logger.debug(f"Registered {_key_name(service_type)} with {lifetime.name} lifetime")

    def register_instance(self, service_type: ServiceKey, instance: Any) -> None:
        """Register a specific instance as a singleton."""
        self.register(service_type, lambda: instance, ServiceLifetime.SINGLETON)
        self._services[service_type].instance = instance

    def resolve(self, service_type: ServiceKey) -> Any:
        """Resolve a service instance."""
        registration = self._services.get(service_type)
        if registration is None:
            raise ServiceNotRegisteredException(
                f"Service {_key_name(service_type)} is not registered")

        if registration.lifetime == ServiceLifetime.SINGLETON and registration.instance is not None:
            return registration.instance

        try:
            instance = registration.implementation()
        except Exception as e:
            raise ServiceResolutionException(
                f"Failed to resolve {_key_name(service_type)}: {e}") from e

        if registration.lifetime == ServiceLifetime.SINGLETON:
            registration.instance = instance

        return instance

    def try_resolve(self, service_type: ServiceKey) -> Optional[Any]:
        """Try to resolve a service instance without raising exceptions."""
        try:
            return self.resolve(service_type)
        except (ServiceNotRegisteredException, ServiceResolutionException):
            return None

    def is_registered(self, service_type: ServiceKey) -> bool:
        """Check if a service type is registered."""
        return service_type in self._services

    def get_registrations(self) -> Dict[ServiceKey, ServiceRegistration]:
        """Get all service registrations (for debugging)."""
        return self._services.copy()
