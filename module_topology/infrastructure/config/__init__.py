"""
Configuration management infrastructure.

This module provides configuration loading and validation for discovery
and logging settings.
"""

from .models import ApplicationConfig, DiscoveryConfig, LoggingConfig
from .loader import ConfigLoader

__all__ = [
    "ApplicationConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "ConfigLoader",
]
