"""
Plugin sources for discovering application modules.

This module provides the in-memory, directory and entry point sources.
Every source returns descriptors in a stable discovery order and collects
load failures instead of stopping at the first broken unit.
"""

import importlib.util
import inspect
import re
import sys
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import Any, Iterable, List, Optional, Union

from loguru import logger

from ..core.domain.descriptors import DiscoveryResult, ModuleDescriptor
from ..core.exceptions import PluginLoadError
from ..core.interfaces.modules import IPluginSource
from ..infrastructure.config.models import DiscoveryConfig
from .base import AppModule

DEFAULT_ENTRY_POINT_GROUP = "module_topology.modules"

_SYNTHETIC_PREFIX = "_module_topology_plugin_"


def is_module_class(obj: Any) -> bool:
    """Check whether an object is a concrete ``AppModule`` subclass."""
    return (isinstance(obj, type) and
            issubclass(obj, AppModule) and
            obj is not AppModule and
            not inspect.isabstract(obj))


def find_module_classes(module: ModuleType) -> List[type]:
    """Find the module classes defined in a Python module, in definition order."""
    return [
        attr for attr in vars(module).values()
        if is_module_class(attr) and attr.__module__ == module.__name__
    ]


class InMemoryPluginSource(IPluginSource):
    """Source serving a pre-built list of descriptors or module classes."""

    def __init__(self, items: Iterable[Union[ModuleDescriptor, type]]) -> None:
        self._items = list(items)

    @property
    def location(self) -> Optional[str]:
        return "<memory>"

    def load(self) -> DiscoveryResult:
        result = DiscoveryResult()

        for item in self._items:
            if isinstance(item, ModuleDescriptor):
                result.descriptors.append(item)
            elif is_module_class(item):
                result.descriptors.append(
                    ModuleDescriptor.from_module_class(item, origin="<memory>"))
            else:
                result.errors.append(PluginLoadError(
                    repr(item), TypeError("not a module descriptor or AppModule subclass")))

        return result


class DirectoryPluginSource(IPluginSource):
    """
    Source importing Python files from a directory.

    Files are visited sorted by relative path. Each ``AppModule`` subclass
    defined in a file becomes one descriptor.
    """

    def __init__(self, directory: Union[str, Path], pattern: str = "*.py", recursive: bool = False) -> None:
        self._directory = Path(directory)
        self._pattern = pattern
        self._recursive = recursive

    @property
    def location(self) -> Optional[str]:
        return str(self._directory)

    @property
    def pattern(self) -> str:
        return self._pattern

    def discover_units(self) -> List[Path]:
        """List candidate plugin files in discovery order."""
        candidates = (self._directory.rglob(self._pattern) if self._recursive
                      else self._directory.glob(self._pattern))

        units = [
            path for path in candidates
            if path.is_file() and not path.name.startswith("__")
        ]
        return sorted(units, key=lambda path: path.relative_to(self._directory).as_posix())

    def load(self) -> DiscoveryResult:
        result = DiscoveryResult()

        if not self._directory.is_dir():
            logger.warning(f"Module directory does not exist: {self._directory}")
            result.errors.append(PluginLoadError(
                str(self._directory), FileNotFoundError(f"not a directory: {self._directory}")))
            return result

        units = self.discover_units()
        logger.info(f"Discovered {len(units)} candidate unit(s) in {self._directory}")

        for path in units:
            logger.debug(f"Loading plugin unit: {path}")
            try:
                module = self._load_unit(path)
                descriptors = [
                    ModuleDescriptor.from_module_class(module_class, origin=str(path))
                    for module_class in find_module_classes(module)
                ]
            except (Exception, SystemExit) as e:
                logger.warning(f"Failed to load plugin unit {path}: {e}")
                result.errors.append(PluginLoadError(str(path), e))
                continue

            if not descriptors:
                logger.debug(f"No modules defined in {path}, skipping")
                continue

            result.descriptors.extend(descriptors)

        return result

    def _module_name(self, path: Path) -> str:
        relative = path.relative_to(self._directory).with_suffix("").as_posix()
        return f"{_SYNTHETIC_PREFIX}{re.sub(r'[^0-9A-Za-z_]', '_', relative)}"

    def _load_unit(self, path: Path) -> ModuleType:
        """Import a plugin file under a synthetic module name."""
        module_name = self._module_name(path)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if not spec or not spec.loader:
            raise ImportError(f"Cannot load plugin from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise

        return module


class EntryPointPluginSource(IPluginSource):
    """Source loading modules registered as package entry points."""

    def __init__(self, group: str = DEFAULT_ENTRY_POINT_GROUP) -> None:
        self._group = group

    @property
    def location(self) -> Optional[str]:
        return f"entry points [{self._group}]"

    def load(self) -> DiscoveryResult:
        result = DiscoveryResult()
        found = sorted(entry_points(group=self._group), key=lambda ep: ep.name)
        logger.info(f"Discovered {len(found)} entry point(s) in group {self._group}")

        for entry_point in found:
            unit = f"entry point {entry_point.name}"
            try:
                target = entry_point.load()
                if isinstance(target, ModuleDescriptor):
                    descriptor: Optional[ModuleDescriptor] = target
                elif is_module_class(target):
                    descriptor = ModuleDescriptor.from_module_class(target, origin=unit)
                else:
                    descriptor = None
            except (Exception, SystemExit) as e:
                logger.warning(f"Failed to load {unit}: {e}")
                result.errors.append(PluginLoadError(unit, e))
                continue

            if descriptor is None:
                logger.debug(f"{unit} does not expose a module, skipping")
                continue

            result.descriptors.append(descriptor)

        return result


def create_plugin_source(config: DiscoveryConfig, location: Optional[str] = None) -> IPluginSource:
    """
    Create the plugin source described by a discovery configuration.

    Args:
        config: Discovery configuration
        location: Directory overriding ``config.directory``

    Returns:
        Plugin source
    """
    if location is None and config.source == "entry_points":
        return EntryPointPluginSource(config.entry_point_group)

    return DirectoryPluginSource(
        location or config.directory,
        pattern=config.pattern,
        recursive=config.recursive,
    )
