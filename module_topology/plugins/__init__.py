"""
Module authoring API and plugin sources.

This package provides the base module class, dependency declaration and
the sources that discover modules from memory, directories or installed
entry points.
"""

from .base import AppModule, ServiceConfigurationContext, depends_on
from .sources import (
    DirectoryPluginSource,
    EntryPointPluginSource,
    InMemoryPluginSource,
    create_plugin_source,
    find_module_classes,
)

__all__ = [
    "AppModule",
    "ServiceConfigurationContext",
    "depends_on",
    "DirectoryPluginSource",
    "EntryPointPluginSource",
    "InMemoryPluginSource",
    "create_plugin_source",
    "find_module_classes",
]
