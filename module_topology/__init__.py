"""
Module Topology - dependency-ordered activation of pluggable application modules.

This package discovers application modules from a plugin source, validates
their declared dependencies, computes a deterministic activation order and
runs each module's configuration hook in that order.
"""

__version__ = "0.1.0"

# Public API exports
from .core.domain.descriptors import DiscoveryResult, ModuleDescriptor
from .core.exceptions import (
    CycleDetectedError,
    DuplicateModuleError,
    MissingDependencyError,
    ModuleConfigurationError,
    ModuleTopologyError,
    PluginDiscoveryError,
    PluginLoadError,
    UnknownModuleError,
)
from .core.services.catalog import ModuleCatalog
from .core.services.resolver import DependencyResolver, resolve_modules
from .application.activator import ModuleActivator
from .application.container import Container, IContainer, ServiceLifetime
from .application.startup import ApplicationStartup, ModuleLoader
from .plugins.base import AppModule, ServiceConfigurationContext, depends_on
from .plugins.sources import DirectoryPluginSource, EntryPointPluginSource, InMemoryPluginSource

__all__ = [
    "DiscoveryResult",
    "ModuleDescriptor",
    "CycleDetectedError",
    "DuplicateModuleError",
    "MissingDependencyError",
    "ModuleConfigurationError",
    "ModuleTopologyError",
    "PluginDiscoveryError",
    "PluginLoadError",
    "UnknownModuleError",
    "ModuleCatalog",
    "DependencyResolver",
    "resolve_modules",
    "ModuleActivator",
    "Container",
    "IContainer",
    "ServiceLifetime",
    "ApplicationStartup",
    "ModuleLoader",
    "AppModule",
    "ServiceConfigurationContext",
    "depends_on",
    "DirectoryPluginSource",
    "EntryPointPluginSource",
    "InMemoryPluginSource",
]
