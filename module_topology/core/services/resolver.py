"""
Dependency graph resolver.

Computes the activation order of a module catalog with a depth-first
topological sort. Nodes are coloured ``UNVISITED``, ``IN_PROGRESS`` or
``DONE``; re-entering an ``IN_PROGRESS`` node means the graph has a cycle.

Stability contract: roots are visited in catalog (discovery) order and
dependencies in declared order. Modules with no path between them keep
their relative discovery order, so resolving the same catalog twice
always yields the same sequence.
"""

from enum import Enum, auto
from typing import Dict, Iterable, Iterator, List, Tuple

from loguru import logger

from ..domain.descriptors import ModuleDescriptor
from ..exceptions import CycleDetectedError
from .catalog import ModuleCatalog


class VisitState(Enum):
    """Traversal colour of a graph node."""
    UNVISITED = auto()
    IN_PROGRESS = auto()
    DONE = auto()


class DependencyResolver:
    """
    Resolves a catalog into a dependency-respecting activation order.

    Each call to :meth:`resolve` starts from fresh traversal state, so a
    resolver never leaks colouring between runs.
    """

    def __init__(self, catalog: ModuleCatalog) -> None:
        self._catalog = catalog

    @property
    def catalog(self) -> ModuleCatalog:
        return self._catalog

    def resolve(self) -> Tuple[str, ...]:
        """
        Compute the activation order.

        Returns:
            Every catalog identity exactly once, dependencies first

        Raises:
            CycleDetectedError: If any dependency cycle exists
        """
        state: Dict[str, VisitState] = {
            identity: VisitState.UNVISITED for identity in self._catalog.identities
        }
        order: List[str] = []

        for identity in self._catalog.identities:
            if state[identity] is VisitState.UNVISITED:
                self._visit(identity, state, order)

        logger.debug(f"Resolved {len(order)} module(s): {', '.join(order)}")
        return tuple(order)

    def _visit(self, root: str, state: Dict[str, VisitState], order: List[str]) -> None:
        # path[i] is the node whose remaining dependencies are pending[i]
        path: List[str] = [root]
        pending: List[Iterator[str]] = [iter(self._catalog.dependencies_of(root))]
        state[root] = VisitState.IN_PROGRESS

        while pending:
            dependency = next(pending[-1], None)

            if dependency is None:
                pending.pop()
                node = path.pop()
                state[node] = VisitState.DONE
                order.append(node)
                continue

            dependency_state = state[dependency]
            if dependency_state is VisitState.DONE:
                continue
            if dependency_state is VisitState.IN_PROGRESS:
                start = path.index(dependency)
                raise CycleDetectedError(path[start:] + [dependency])

            state[dependency] = VisitState.IN_PROGRESS
            path.append(dependency)
            pending.append(iter(self._catalog.dependencies_of(dependency)))


def resolve_modules(descriptors: Iterable[ModuleDescriptor]) -> Tuple[str, ...]:
    """Build a catalog from descriptors and resolve it in one step."""
    return DependencyResolver(ModuleCatalog(descriptors)).resolve()
