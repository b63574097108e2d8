"""
Base classes and helpers for authoring application modules.

Module developers subclass :class:`AppModule`, declare dependencies with
:func:`depends_on` and register their services in ``configure_services``::

    @depends_on(StorageModule, "Caching")
    class OrdersModule(AppModule):
        def configure_services(self, context):
            context.services.register(OrderService, OrderService)
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from ..core.interfaces.modules import IAppModule, IRegistrationContext

M = TypeVar('M', bound=Type['AppModule'])

DependencyRef = Union[str, Type['AppModule']]

_DEPENDENCIES_ATTR = '__module_dependencies__'


class AppModule(IAppModule):
    """
    Base module class.

    The identity of a module is its ``name`` class attribute when set,
    otherwise the class name.
    """

    name: Optional[str] = None

    @classmethod
    def module_id(cls) -> str:
        """Get the module identity."""
        return cls.__dict__.get('name') or cls.__name__

    @classmethod
    def dependency_ids(cls) -> Tuple[str, ...]:
        """
        Get the identities this module depends on.

        Dependencies declared directly on the class come first, followed
        by those inherited from base modules.
        """
        result: List[str] = []
        for klass in cls.__mro__:
            for ref in klass.__dict__.get(_DEPENDENCIES_ATTR, ()):
                identity = _dependency_id(ref)
                if identity not in result:
                    result.append(identity)
        return tuple(result)

    def configure_services(self, context: IRegistrationContext) -> None:
        """Register module services. The default does nothing."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} module {self.module_id()!r}>"


def _dependency_id(ref: DependencyRef) -> str:
    if isinstance(ref, str):
        return ref
    return ref.module_id()


def depends_on(*dependencies: DependencyRef) -> Callable[[M], M]:
    """
    Declare the modules a module depends on.

    Args:
        *dependencies: ``AppModule`` subclasses or module identities

    Returns:
        Class decorator. Stacked decorators combine in the order written.

    Raises:
        TypeError: If a dependency is neither a string nor a module class
    """
    for ref in dependencies:
        if isinstance(ref, str):
            if not ref:
                raise TypeError("Module dependency identity cannot be empty")
            continue
        if not (isinstance(ref, type) and issubclass(ref, AppModule)):
            raise TypeError(
                f"Module dependency must be an AppModule subclass or identity, got {ref!r}")

    def decorator(module_class: M) -> M:
        if not (isinstance(module_class, type) and issubclass(module_class, AppModule)):
            raise TypeError(f"@depends_on can only decorate AppModule subclasses, got {module_class!r}")
        # Decorators apply bottom-up; prepend so the source order is kept.
        own = module_class.__dict__.get(_DEPENDENCIES_ATTR, ())
        setattr(module_class, _DEPENDENCIES_ATTR, tuple(dependencies) + tuple(own))
        return module_class

    return decorator


class ServiceConfigurationContext(IRegistrationContext):
    """
    Registration context handed to module configuration hooks.

    Wraps the application's service collection and the per-module
    settings from configuration.
    """

    def __init__(self, services: Any, config: Optional[Mapping[str, Any]] = None) -> None:
        self._services = services
        self._config: Mapping[str, Any] = MappingProxyType(dict(config or {}))

    @property
    def services(self) -> Any:
        """Get the service registration surface."""
        return self._services

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get a configuration value, supporting dotted keys."""
        current: Any = self._config
        for part in key.split('.'):
            if not isinstance(current, Mapping) or part not in current:
                return default
            current = current[part]
        return current

    def module_config(self, identity: str) -> Dict[str, Any]:
        """Get the settings configured for one module."""
        settings = self._config.get(identity)
        return dict(settings) if isinstance(settings, Mapping) else {}
