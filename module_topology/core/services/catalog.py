"""
Module catalog.

Indexes module descriptors by identity and validates the set before any
graph traversal happens. The catalog is immutable once built.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from loguru import logger

from ..domain.descriptors import ModuleDescriptor
from ..exceptions import DuplicateModuleError, MissingDependencyError, UnknownModuleError


class ModuleCatalog:
    """
    Identity-keyed, read-only index of module descriptors.

    Iteration follows discovery order, which the resolver relies on for
    its stability contract.
    """

    def __init__(self, descriptors: Iterable[ModuleDescriptor]) -> None:
        index: Dict[str, ModuleDescriptor] = {}

        for descriptor in descriptors:
            existing = index.get(descriptor.identity)
            if existing is not None:
                raise DuplicateModuleError(
                    descriptor.identity, (existing.origin, descriptor.origin))
            index[descriptor.identity] = descriptor

        for descriptor in index.values():
            for dependency in descriptor.dependency_ids:
                if dependency not in index:
                    raise MissingDependencyError(descriptor.identity, dependency)

        self._index = index
        self._identities: Tuple[str, ...] = tuple(index)
        logger.debug(f"Catalog built with {len(index)} module(s)")

    @property
    def identities(self) -> Tuple[str, ...]:
        """Module identities in discovery order."""
        return self._identities

    def get(self, identity: str) -> Optional[ModuleDescriptor]:
        return self._index.get(identity)

    def dependencies_of(self, identity: str) -> Tuple[str, ...]:
        return self[identity].dependency_ids

    def as_mapping(self) -> Mapping[str, ModuleDescriptor]:
        """Read-only view of the identity index."""
        return MappingProxyType(self._index)

    def __getitem__(self, identity: str) -> ModuleDescriptor:
        try:
            return self._index[identity]
        except KeyError:
            raise UnknownModuleError(identity) from None

    def __contains__(self, identity: object) -> bool:
        return identity in self._index

    def __iter__(self) -> Iterator[ModuleDescriptor]:
        return iter(self._index.values())

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"ModuleCatalog({list(self._identities)!r})"
