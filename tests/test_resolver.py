"""
Tests for the dependency graph resolver.

This module tests ordering, determinism, cycle detection and the
reference four-module scenario.
"""

import pytest
from typing import Dict, List, Sequence

from module_topology.core.domain.descriptors import ModuleDescriptor
from module_topology.core.exceptions import CycleDetectedError
from module_topology.core.services.catalog import ModuleCatalog
from module_topology.core.services.resolver import DependencyResolver, resolve_modules


def build_catalog(graph: Dict[str, Sequence[str]]) -> ModuleCatalog:
    """Build a catalog from an identity -> dependencies mapping, keeping insertion order."""
    return ModuleCatalog(
        ModuleDescriptor.from_callback(identity, dependencies)
        for identity, dependencies in graph.items()
    )


def assert_edges_respected(order: Sequence[str], graph: Dict[str, Sequence[str]]) -> None:
    position = {identity: index for index, identity in enumerate(order)}
    for module, dependencies in graph.items():
        for dependency in dependencies:
            assert position[dependency] < position[module], f"{dependency} must precede {module}"


class TestDependencyResolver:
    """Test cases for DependencyResolver."""

    def test_reference_scenario(self) -> None:
        """Test the four-module reference graph."""
        catalog = build_catalog({
            "Module1": ["Module2"],
            "Module2": ["Module3", "Module4"],
            "Module3": [],
            "Module4": ["Module3"],
        })

        order = DependencyResolver(catalog).resolve()

        assert order == ("Module3", "Module4", "Module2", "Module1")

    def test_empty_catalog(self) -> None:
        """Test resolving an empty catalog."""
        assert DependencyResolver(ModuleCatalog([])).resolve() == ()

    def test_independent_modules_keep_discovery_order(self) -> None:
        """Test the stability contract for modules without a path between them."""
        catalog = build_catalog({"Zeta": [], "Alpha": [], "Mu": []})

        assert DependencyResolver(catalog).resolve() == ("Zeta", "Alpha", "Mu")

    def test_dependencies_visited_in_declared_order(self) -> None:
        """Test that declared dependency order breaks ties."""
        catalog = build_catalog({"App": ["C", "A", "B"], "A": [], "B": [], "C": []})

        assert DependencyResolver(catalog).resolve() == ("C", "A", "B", "App")

    def test_diamond_dependency_appears_once(self) -> None:
        """Test diamond deduplication."""
        graph = {"A": ["B", "C"], "B": ["D"], "C": ["D"], "D": []}

        order = DependencyResolver(build_catalog(graph)).resolve()

        assert order.count("D") == 1
        assert order == ("D", "B", "C", "A")
        assert_edges_respected(order, graph)

    def test_ordering_and_totality_on_larger_graph(self) -> None:
        """Test that every edge is respected and every module appears once."""
        graph = {
            "web": ["auth", "orders", "logging"],
            "orders": ["db", "events", "auth"],
            "auth": ["db", "crypto"],
            "events": ["logging"],
            "db": ["logging", "config"],
            "crypto": [],
            "logging": ["config"],
            "config": [],
            "metrics": [],
        }

        order = DependencyResolver(build_catalog(graph)).resolve()

        assert sorted(order) == sorted(graph)
        assert len(order) == len(set(order))
        assert_edges_respected(order, graph)

    def test_resolution_is_deterministic(self) -> None:
        """Test that resolving twice yields identical output."""
        graph = {"a": ["c", "b"], "b": ["d"], "c": ["d"], "d": [], "e": ["a"]}
        catalog = build_catalog(graph)
        resolver = DependencyResolver(catalog)

        first = resolver.resolve()
        second = resolver.resolve()
        third = DependencyResolver(build_catalog(graph)).resolve()

        assert first == second == third

    def test_two_module_cycle(self) -> None:
        """Test that A -> B -> A is reported with its full path."""
        catalog = build_catalog({"A": ["B"], "B": ["A"]})

        with pytest.raises(CycleDetectedError) as exc_info:
            DependencyResolver(catalog).resolve()

        assert exc_info.value.cycle == ("A", "B", "A")
        assert "A -> B -> A" in str(exc_info.value)

    def test_self_dependency_is_a_cycle(self) -> None:
        """Test that a module depending on itself is a cycle."""
        catalog = build_catalog({"Loop": ["Loop"]})

        with pytest.raises(CycleDetectedError) as exc_info:
            DependencyResolver(catalog).resolve()

        assert exc_info.value.cycle == ("Loop", "Loop")

    def test_cycle_path_excludes_entry_chain(self) -> None:
        """Test that the cycle path starts at the re-entered module."""
        catalog = build_catalog({
            "Root": ["Entry"],
            "Entry": ["X"],
            "X": ["Y"],
            "Y": ["Z"],
            "Z": ["X"],
        })

        with pytest.raises(CycleDetectedError) as exc_info:
            DependencyResolver(catalog).resolve()

        assert exc_info.value.cycle == ("X", "Y", "Z", "X")

    def test_cycle_anywhere_aborts_resolution(self) -> None:
        """Test that a cycle in an unrelated part of the graph still fails."""
        catalog = build_catalog({"Fine": [], "Other": [], "P": ["Q"], "Q": ["P"]})

        with pytest.raises(CycleDetectedError):
            DependencyResolver(catalog).resolve()

    def test_deep_chain_does_not_hit_recursion_limit(self) -> None:
        """Test a dependency chain much deeper than the recursion limit."""
        depth = 5000
        graph: Dict[str, List[str]] = {
            f"m{i}": [f"m{i + 1}"] if i + 1 < depth else [] for i in range(depth)
        }

        order = DependencyResolver(build_catalog(graph)).resolve()

        assert order[0] == f"m{depth - 1}"
        assert order[-1] == "m0"

    def test_resolve_modules_helper(self) -> None:
        """Test the catalog-and-resolve convenience helper."""
        order = resolve_modules([
            ModuleDescriptor.from_callback("B", ["A"]),
            ModuleDescriptor.from_callback("A"),
        ])

        assert order == ("A", "B")
