"""
Module descriptors and discovery results.

A descriptor is everything the resolver needs to know about a module:
its identity, the identities it depends on, and how to build and
configure it.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..exceptions import PluginLoadError
from ..interfaces.modules import IAppModule, IRegistrationContext


ConfigureCallback = Callable[[IRegistrationContext], None]


class CallbackModule(IAppModule):
    """Module whose configuration hook is a plain callable."""

    def __init__(self, identity: str, configure: ConfigureCallback) -> None:
        self.identity = identity
        self._configure = configure

    def configure_services(self, context: IRegistrationContext) -> None:
        self._configure(context)

    def __repr__(self) -> str:
        return f"CallbackModule({self.identity!r})"


def _unique(items: Sequence[str]) -> Tuple[str, ...]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return tuple(result)


@dataclass(frozen=True)
class ModuleDescriptor:
    """Resolver-visible summary of a module."""

    identity: str
    dependency_ids: Tuple[str, ...] = ()
    factory: Callable[[], IAppModule] = field(default=None, compare=False, repr=False)  # type: ignore[assignment]
    origin: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.identity, str) or not self.identity:
            raise ValueError(f"Module identity must be a non-empty string, got {self.identity!r}")
        if isinstance(self.dependency_ids, str):
            raise TypeError(
                f"Dependencies of module '{self.identity}' must be a sequence of identities, "
                f"got the string {self.dependency_ids!r}")
        # Accept any sequence but store an immutable tuple.
        object.__setattr__(self, 'dependency_ids', tuple(self.dependency_ids))
        if self.factory is None:
            raise ValueError(f"Module '{self.identity}' has no factory")

    def create(self) -> IAppModule:
        """Create a new module instance."""
        return self.factory()

    def configure(self, instance: IAppModule, context: IRegistrationContext) -> None:
        """Invoke the configuration hook of an instance of this module."""
        instance.configure_services(context)

    @classmethod
    def from_callback(cls,
                      identity: str,
                      dependency_ids: Sequence[str] = (),
                      configure: Optional[ConfigureCallback] = None,
                      origin: Optional[str] = "<memory>") -> 'ModuleDescriptor':
        """
        Build a descriptor around an opaque configure callback.

        Args:
            identity: Module identity
            dependency_ids: Identities this module depends on
            configure: Callback receiving the registration context
            origin: Diagnostic origin

        Returns:
            Module descriptor
        """
        hook: ConfigureCallback = configure or (lambda context: None)
        return cls(
            identity=identity,
            dependency_ids=dependency_ids,
            factory=lambda: CallbackModule(identity, hook),
            origin=origin,
        )

    @classmethod
    def from_module_class(cls, module_class: Any, origin: Optional[str] = None) -> 'ModuleDescriptor':
        """
        Build a descriptor from an ``AppModule`` subclass.

        Args:
            module_class: Class exposing ``module_id()`` and ``dependency_ids()``
            origin: Diagnostic origin, defaults to the defining Python module

        Returns:
            Module descriptor
        """
        return cls(
            identity=module_class.module_id(),
            dependency_ids=_unique(module_class.dependency_ids()),
            factory=module_class,
            origin=origin or module_class.__module__,
        )


@dataclass
class DiscoveryResult:
    """Descriptors found by a plugin source plus the units that failed to load."""

    descriptors: List[ModuleDescriptor] = field(default_factory=list)
    errors: List[PluginLoadError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: 'DiscoveryResult') -> None:
        self.descriptors.extend(other.descriptors)
        self.errors.extend(other.errors)
