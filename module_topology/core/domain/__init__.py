"""
Domain models for module discovery and resolution.
"""

from .descriptors import CallbackModule, DiscoveryResult, ModuleDescriptor

__all__ = [
    "CallbackModule",
    "DiscoveryResult",
    "ModuleDescriptor",
]
