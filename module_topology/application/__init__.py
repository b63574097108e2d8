"""
Application layer containing module activation, the service container and
startup logic.

This layer orchestrates the interaction between the core resolution
engine and the infrastructure that discovers and configures modules.
"""

from .activator import ModuleActivator
from .container import Container, IContainer, ServiceLifetime
from .startup import ApplicationStartup, LoadedModules, ModuleLoader

__all__ = [
    "ModuleActivator",
    "Container",
    "IContainer",
    "ServiceLifetime",
    "ApplicationStartup",
    "LoadedModules",
    "ModuleLoader",
]
