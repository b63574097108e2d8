"""
Logging infrastructure built on loguru.
"""

from .setup import setup_logging

__all__ = [
    "setup_logging",
]
