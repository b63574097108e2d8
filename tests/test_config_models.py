"""
Tests for configuration models.
"""

import pytest

from module_topology.infrastructure.config.models import (
    ApplicationConfig,
    DiscoveryConfig,
    LoggingConfig,
)


class TestApplicationConfig:
    """Test cases for ApplicationConfig."""

    def test_defaults(self) -> None:
        config = ApplicationConfig()

        assert config.discovery.source == "directory"
        assert config.discovery.pattern == "*.py"
        assert config.discovery.recursive is False
        assert config.logging.level == "INFO"
        assert config.logging.file_enabled is False
        assert config.modules == {}

    def test_log_level_is_normalised(self) -> None:
        config = ApplicationConfig(logging=LoggingConfig(level="debug"))

        assert config.logging.level == "DEBUG"

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValueError, match="Unknown log level"):
            ApplicationConfig(logging=LoggingConfig(level="LOUD"))

    def test_non_positive_backup_count(self) -> None:
        with pytest.raises(ValueError, match="backup count"):
            ApplicationConfig(logging=LoggingConfig(backup_count=0))

    def test_unknown_discovery_source(self) -> None:
        with pytest.raises(ValueError, match="Discovery source"):
            ApplicationConfig(discovery=DiscoveryConfig(source="registry"))

    def test_empty_pattern(self) -> None:
        with pytest.raises(ValueError, match="pattern"):
            ApplicationConfig(discovery=DiscoveryConfig(pattern=""))

    def test_round_trip_through_dict(self) -> None:
        config = ApplicationConfig(
            name="Shop",
            discovery=DiscoveryConfig(directory="shop_modules", recursive=True),
            modules={"Orders": {"currency": "EUR"}},
        )

        restored = ApplicationConfig.from_dict(config.to_dict())

        assert restored == config

    def test_from_dict_rejects_unknown_section_keys(self) -> None:
        with pytest.raises(ValueError, match="Invalid configuration section"):
            ApplicationConfig.from_dict({"discovery": {"folder": "x"}})

    def test_from_dict_rejects_non_mapping_modules(self) -> None:
        with pytest.raises(ValueError, match="modules"):
            ApplicationConfig.from_dict({"modules": ["Orders"]})

    @pytest.mark.parametrize("section,values", [
        ("logging", {"level": 5}),
        ("logging", {"backup_count": "5"}),
        ("logging", {"backup_count": True}),
        ("logging", {"file_enabled": "yes"}),
        ("discovery", {"pattern": 7}),
        ("discovery", {"recursive": "true"}),
    ])
    def test_from_dict_rejects_wrong_value_types(self, section: str, values: dict) -> None:
        with pytest.raises(ValueError, match="must be of type"):
            ApplicationConfig.from_dict({section: values})

    def test_from_dict_accepts_empty_sections(self) -> None:
        config = ApplicationConfig.from_dict({"discovery": None, "logging": None})

        assert config.discovery == DiscoveryConfig()
        assert config.logging == LoggingConfig()
