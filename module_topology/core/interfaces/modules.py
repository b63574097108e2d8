"""
Module system interfaces.

These interfaces define the contracts between application modules, the
sources that discover them and the registration context they configure.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..domain.descriptors import DiscoveryResult


class IRegistrationContext(ABC):
    """Interface for the capability handed to module configuration hooks."""

    @property
    @abstractmethod
    def services(self) -> Any:
        """
        Get the service registration surface.

        Returns:
            The externally owned service collection or container
        """
        pass

    @abstractmethod
    def get_config(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        pass


class IAppModule(ABC):
    """Interface for application modules."""

    @abstractmethod
    def configure_services(self, context: IRegistrationContext) -> None:
        """
        Register the module's services.

        Called exactly once, after every module this one depends on has
        been configured.

        Args:
            context: Registration context supplied by the application
        """
        pass


class IPluginSource(ABC):
    """Interface for module discovery sources."""

    @property
    @abstractmethod
    def location(self) -> Optional[str]:
        """Get a human readable description of where modules come from."""
        pass

    @abstractmethod
    def load(self) -> 'DiscoveryResult':
        """
        Discover every module descriptor available from this source.

        Units that fail to load are reported in the result rather than
        raised, so that all broken units are visible after one run.

        Returns:
            Descriptors in discovery order together with collected load errors
        """
        pass
