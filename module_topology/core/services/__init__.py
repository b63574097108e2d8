"""
Core services: catalog validation and dependency resolution.
"""

from .catalog import ModuleCatalog
from .resolver import DependencyResolver, VisitState, resolve_modules

__all__ = [
    "ModuleCatalog",
    "DependencyResolver",
    "VisitState",
    "resolve_modules",
]
