"""
Module activation.

Walks a resolved order, creates each module once and runs its
configuration hook against the registration context. Activation is
fail-fast: service registration is not transactional, so the first
failing module stops the run.
"""

from typing import Dict, Iterable, Optional

from loguru import logger

from ..core.exceptions import ModuleConfigurationError
from ..core.interfaces.modules import IAppModule, IRegistrationContext
from ..core.services.catalog import ModuleCatalog


class ModuleActivator:
    """
    Instantiates and configures modules in resolution order.

    The only state kept is which modules have already been activated, so
    that each module is instantiated at most once per activator.
    """

    def __init__(self, catalog: ModuleCatalog) -> None:
        self._catalog = catalog
        self._instances: Dict[str, IAppModule] = {}

    @property
    def instances(self) -> Dict[str, IAppModule]:
        """Activated module instances, in activation order."""
        return dict(self._instances)

    def is_activated(self, identity: str) -> bool:
        return identity in self._instances

    def get_instance(self, identity: str) -> Optional[IAppModule]:
        return self._instances.get(identity)

    def activate(self, order: Iterable[str], context: IRegistrationContext) -> Dict[str, IAppModule]:
        """
        Activate modules in the given order.

        Args:
            order: Resolved module identities, dependencies first
            context: Registration context passed to every configuration hook

        Returns:
            Modules activated by this call, in activation order

        Raises:
            UnknownModuleError: If an identity is not in the catalog
            ModuleConfigurationError: If a module fails to build or configure
        """
        order = list(order)
        # Validate up front so nothing runs against an unknown identity.
        descriptors = [self._catalog[identity] for identity in order]
        activated: Dict[str, IAppModule] = {}

        for descriptor in descriptors:
            identity = descriptor.identity
            if identity in self._instances:
                logger.debug(f"Module already activated, skipping: {identity}")
                continue

            try:
                instance = descriptor.create()
                descriptor.configure(instance, context)
            except Exception as e:
                logger.error(f"Module {identity} failed to configure: {e}")
                raise ModuleConfigurationError(identity, e) from e

            self._instances[identity] = instance
            activated[identity] = instance
            logger.info(f"Activated module: {identity}")

        return activated