"""
Application startup logic.

This module ties discovery, validation, resolution and activation
together. Every graph problem is raised before the first module is
activated, so the application never starts half configured because of an
invalid module set.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from .activator import ModuleActivator
from .container import IContainer
from ..core.exceptions import PluginDiscoveryError
from ..core.interfaces.modules import IAppModule, IPluginSource
from ..core.services.catalog import ModuleCatalog
from ..core.services.resolver import DependencyResolver
from ..infrastructure.config.models import ApplicationConfig
from ..plugins.base import ServiceConfigurationContext


@dataclass(frozen=True)
class LoadedModules:
    """A validated catalog together with its resolved activation order."""
    catalog: ModuleCatalog
    order: Tuple[str, ...]


class ModuleLoader:
    """Discovers modules from a source and resolves their activation order."""

    def __init__(self, source: IPluginSource) -> None:
        self._source = source

    def load_modules(self) -> LoadedModules:
        """
        Discover, validate and resolve modules.

        Returns:
            Catalog and resolved order

        Raises:
            PluginDiscoveryError: If any plugin unit failed to load
            DuplicateModuleError: If two modules share an identity
            MissingDependencyError: If a dependency is unknown
            CycleDetectedError: If the dependencies form a cycle
        """
        logger.info(f"Loading modules from {self._source.location}")
        discovery = self._source.load()

        if not discovery.ok:
            for error in discovery.errors:
                logger.error(error.message)
            raise PluginDiscoveryError(discovery.errors)

        catalog = ModuleCatalog(discovery.descriptors)
        order = DependencyResolver(catalog).resolve()

        logger.info(f"Module activation order: {' -> '.join(order) or '(empty)'}")
        return LoadedModules(catalog=catalog, order=order)


class ApplicationStartup:
    """
    Configures application services from discovered modules.

    Modules are activated against a :class:`ServiceConfigurationContext`
    wrapping the container, in resolved order.
    """

    def __init__(self,
                 container: IContainer,
                 source: IPluginSource,
                 config: Optional[ApplicationConfig] = None) -> None:
        self._container = container
        self._loader = ModuleLoader(source)
        self._config = config or ApplicationConfig()
        self._activator: Optional[ModuleActivator] = None

    @property
    def modules(self) -> Dict[str, IAppModule]:
        """Activated modules, in activation order."""
        return self._activator.instances if self._activator else {}

    def create_context(self) -> ServiceConfigurationContext:
        return ServiceConfigurationContext(self._container, self._config.modules)

    def configure_services(self) -> Tuple[str, ...]:
        """
        Load all modules and run their configuration hooks.

        Returns:
            The resolved activation order

        Raises:
            ModuleTopologyError: On any discovery, graph or configuration failure
        """
        logger.info("Configuring module services...")

        loaded = self._loader.load_modules()
        self._activator = ModuleActivator(loaded.catalog)
        self._activator.activate(loaded.order, self.create_context())

        logger.info(f"Configured {len(loaded.order)} module(s)")
        return loaded.order

    def get_module(self, identity: str) -> Optional[Any]:
        return self._activator.get_instance(identity) if self._activator else None
