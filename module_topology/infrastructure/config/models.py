"""
Configuration models and data structures.

This module defines the configuration models used throughout the application,
providing type safety and validation for configuration values.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

VALID_SOURCES = ("directory", "entry_points")
VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _require_type(section: str, key: str, value: Any, expected: type) -> None:
    # bool is an int subclass but never a valid count
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ValueError(
            f"{section}.{key} must be of type {expected.__name__}, got {type(value).__name__}")


@dataclass
class DiscoveryConfig:
    """Module discovery configuration."""
    source: str = "directory"
    directory: str = "modules"
    pattern: str = "*.py"
    recursive: bool = False
    entry_point_group: str = "module_topology.modules"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    # Basic application settings
    name: str = "Module Topology"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "production"

    # Component configurations
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Per-module settings handed to configuration hooks
    modules: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_discovery()
        self._validate_logging()

    def _validate_discovery(self) -> None:
        for key in ('source', 'directory', 'pattern', 'entry_point_group'):
            _require_type('discovery', key, getattr(self.discovery, key), str)
        _require_type('discovery', 'recursive', self.discovery.recursive, bool)

        if self.discovery.source not in VALID_SOURCES:
            raise ValueError(
                f"Discovery source must be one of {', '.join(VALID_SOURCES)}, "
                f"got {self.discovery.source!r}")
        if not self.discovery.pattern:
            raise ValueError("Discovery pattern cannot be empty")

    def _validate_logging(self) -> None:
        for key in ('level', 'log_directory', 'max_file_size'):
            _require_type('logging', key, getattr(self.logging, key), str)
        for key in ('console_enabled', 'file_enabled'):
            _require_type('logging', key, getattr(self.logging, key), bool)
        _require_type('logging', 'backup_count', self.logging.backup_count, int)

        self.logging.level = self.logging.level.upper()
        if self.logging.level not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level: {self.logging.level}")
        if self.logging.backup_count <= 0:
            raise ValueError(
                f"Log backup count must be positive, got {self.logging.backup_count}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary."""
        modules = data.get('modules') or {}
        if not isinstance(modules, dict):
            raise ValueError("'modules' must be a mapping of module identity to settings")

        try:
            discovery_config = DiscoveryConfig(**(data.get('discovery') or {}))
            logging_config = LoggingConfig(**(data.get('logging') or {}))
        except TypeError as e:
            raise ValueError(f"Invalid configuration section: {e}") from e

        return cls(
            name=data.get('name', 'Module Topology'),
            version=str(data.get('version', '0.1.0')),
            debug=data.get('debug', False),
            environment=data.get('environment', 'production'),
            discovery=discovery_config,
            logging=logging_config,
            modules=modules,
            config_file_path=data.get('config_file_path'),
        )
