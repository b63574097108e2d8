"""
Error taxonomy for module discovery, resolution and activation.

Every error carries a human readable message and a stable error code so
that callers (and the CLI) can report failures without parsing text.
"""

from typing import Iterable, List, Optional, Sequence, Tuple


class ModuleTopologyError(Exception):
    """Base class for all module topology errors."""

    error_code = "MODULE_TOPOLOGY_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        self.message = message
        if error_code:
            self.error_code = error_code
        super().__init__(self.message)


class PluginLoadError(ModuleTopologyError):
    """A candidate plugin unit could not be loaded."""

    error_code = "PLUGIN_LOAD_ERROR"

    def __init__(self, unit: str, cause: Optional[BaseException] = None) -> None:
        self.unit = unit
        self.cause = cause
        detail = f": {type(cause).__name__}: {cause}" if cause is not None else ""
        super().__init__(f"Failed to load plugin unit {unit}{detail}")


class PluginDiscoveryError(ModuleTopologyError):
    """Discovery finished with one or more unloadable plugin units."""

    error_code = "PLUGIN_DISCOVERY_ERROR"

    def __init__(self, errors: Iterable[PluginLoadError]) -> None:
        self.errors: List[PluginLoadError] = list(errors)
        lines = "\n".join(f"  - {error.message}" for error in self.errors)
        super().__init__(
            f"{len(self.errors)} plugin unit(s) failed to load:\n{lines}")


class DuplicateModuleError(ModuleTopologyError):
    """Two descriptors share the same identity."""

    error_code = "DUPLICATE_MODULE"

    def __init__(self, identity: str, origins: Sequence[Optional[str]] = ()) -> None:
        self.identity = identity
        self.origins = tuple(origin for origin in origins if origin)
        where = f" (declared in {', '.join(self.origins)})" if self.origins else ""
        super().__init__(f"Duplicate module identity '{identity}'{where}")


class MissingDependencyError(ModuleTopologyError):
    """A module depends on an identity that no descriptor provides."""

    error_code = "MISSING_DEPENDENCY"

    def __init__(self, module: str, missing_dependency: str) -> None:
        self.module = module
        self.missing_dependency = missing_dependency
        super().__init__(
            f"Module '{module}' depends on unknown module '{missing_dependency}'")


class CycleDetectedError(ModuleTopologyError):
    """The dependency graph contains a cycle."""

    error_code = "DEPENDENCY_CYCLE"

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle: Tuple[str, ...] = tuple(cycle)
        super().__init__(
            f"Circular module dependency detected: {' -> '.join(self.cycle)}")


class UnknownModuleError(ModuleTopologyError, KeyError):
    """An identity was requested that the catalog does not contain."""

    error_code = "UNKNOWN_MODULE"

    def __init__(self, identity: str) -> None:
        self.identity = identity
        super().__init__(f"Module '{identity}' is not in the catalog")

    def __str__(self) -> str:
        return self.message


class ModuleConfigurationError(ModuleTopologyError):
    """A module failed while being instantiated or configured."""

    error_code = "MODULE_CONFIGURATION_ERROR"

    def __init__(self, module: str, cause: BaseException) -> None:
        self.module = module
        self.cause = cause
        super().__init__(
            f"Module '{module}' failed to configure: {type(cause).__name__}: {cause}")
