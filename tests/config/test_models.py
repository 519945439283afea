"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- LocalizationConfig model
- RowFieldsConfig root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rowfields.config.models import (
    LocalizationConfig,
    LoggingConfig,
    LogOutputConfig,
    RowFieldsConfig,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        """Default values."""
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout", "/var/log/rowfields.log"])
    def test_valid_destinations(self, destination: str) -> None:
        """Streams and absolute paths are accepted."""
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_path_fails(self) -> None:
        """Relative path is rejected."""
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/rowfields.log")

    def test_invalid_format_fails(self) -> None:
        """Only json and console formats exist."""
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_defaults(self) -> None:
        """Defaults to INFO with one console output."""
        config = LoggingConfig()
        assert config.level == "INFO"
        assert len(config.outputs) == 1

    def test_invalid_level_fails(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestLocalizationConfig:
    """Tests for LocalizationConfig model."""

    def test_defaults(self) -> None:
        """Invariant language and no text files."""
        config = LocalizationConfig()
        assert config.default_language == ""
        assert config.text_files == []

    def test_language_is_stripped(self) -> None:
        assert LocalizationConfig(default_language=" de-DE ").default_language == "de-DE"


class TestRowFieldsConfig:
    """Tests for root config model."""

    def test_sections_default(self) -> None:
        """All sections get default instances."""
        config = RowFieldsConfig()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.localization, LocalizationConfig)

    def test_nested_dict_validates(self) -> None:
        """Nested dicts validate into section models."""
        config = RowFieldsConfig.model_validate(
            {"logging": {"level": "DEBUG"}, "localization": {"default_language": "en"}}
        )
        assert config.logging.level == "DEBUG"
        assert config.localization.default_language == "en"
