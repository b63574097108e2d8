"""
Core interfaces defining the contracts between modules, plugin sources
and registration contexts.
"""

from .modules import IAppModule, IPluginSource, IRegistrationContext

__all__ = [
    "IAppModule",
    "IPluginSource",
    "IRegistrationContext",
]
