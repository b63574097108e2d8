"""
Tests for module descriptors and discovery results.
"""

import pytest
from unittest.mock import Mock

from module_topology.core.domain.descriptors import CallbackModule, DiscoveryResult, ModuleDescriptor
from module_topology.core.exceptions import PluginLoadError
from module_topology.plugins.base import AppModule, depends_on


class Storage(AppModule):
    pass


@depends_on(Storage, "Cache", Storage)
class Orders(AppModule):
    pass


class TestModuleDescriptor:
    """Test cases for ModuleDescriptor."""

    def test_from_callback_invokes_configure_with_context(self) -> None:
        configure = Mock()
        context = Mock()
        descriptor = ModuleDescriptor.from_callback("Data", ["Config"], configure)

        instance = descriptor.create()
        descriptor.configure(instance, context)

        assert isinstance(instance, CallbackModule)
        assert descriptor.dependency_ids == ("Config",)
        assert descriptor.origin == "<memory>"
        configure.assert_called_once_with(context)

    def test_from_callback_without_configure(self) -> None:
        descriptor = ModuleDescriptor.from_callback("Empty")

        descriptor.configure(descriptor.create(), Mock())

        assert descriptor.dependency_ids == ()

    def test_factory_creates_new_instances(self) -> None:
        descriptor = ModuleDescriptor.from_callback("Data")

        assert descriptor.create() is not descriptor.create()

    def test_from_module_class(self) -> None:
        descriptor = ModuleDescriptor.from_module_class(Orders)

        assert descriptor.identity == "Orders"
        # Repeated declarations collapse to their first occurrence
        assert descriptor.dependency_ids == ("Storage", "Cache")
        assert descriptor.origin == __name__
        assert isinstance(descriptor.create(), Orders)

    def test_dependency_ids_are_stored_as_tuple(self) -> None:
        descriptor = ModuleDescriptor("Data", ["A", "B"], factory=lambda: CallbackModule("Data", print))

        assert descriptor.dependency_ids == ("A", "B")

    def test_string_dependencies_are_rejected(self) -> None:
        with pytest.raises(TypeError, match="sequence of identities"):
            ModuleDescriptor("Data", "BC", factory=lambda: CallbackModule("Data", print))  # type: ignore[arg-type]

    def test_from_callback_rejects_string_dependencies(self) -> None:
        with pytest.raises(TypeError):
            ModuleDescriptor.from_callback("A", "BC")

    def test_descriptor_is_frozen(self) -> None:
        descriptor = ModuleDescriptor.from_callback("Data")

        with pytest.raises(AttributeError):
            descriptor.identity = "Other"  # type: ignore[misc]

    @pytest.mark.parametrize("identity", ["", None, 42])
    def test_invalid_identity(self, identity: object) -> None:
        with pytest.raises(ValueError):
            ModuleDescriptor(identity, factory=lambda: None)  # type: ignore[arg-type]

    def test_missing_factory(self) -> None:
        with pytest.raises(ValueError):
            ModuleDescriptor("Data")


class TestDiscoveryResult:
    """Test cases for DiscoveryResult."""

    def test_ok_without_errors(self) -> None:
        result = DiscoveryResult([ModuleDescriptor.from_callback("Data")])

        assert result.ok

    def test_extend_combines_descriptors_and_errors(self) -> None:
        first = DiscoveryResult([ModuleDescriptor.from_callback("A")])
        second = DiscoveryResult(
            [ModuleDescriptor.from_callback("B")],
            [PluginLoadError("broken.py", SyntaxError("bad"))],
        )

        first.extend(second)

        assert [d.identity for d in first.descriptors] == ["A", "B"]
        assert len(first.errors) == 1
        assert not first.ok
