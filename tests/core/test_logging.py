"""Tests for structured logging."""

import logging
from pathlib import Path

import structlog

from rowfields.config.models import LoggingConfig, LogOutputConfig
from rowfields.core.logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)
from rowfields.data import Int32Field, RowFields


class TestCorrelationId:
    """Correlation id context variable tests."""

    def setup_method(self) -> None:
        """Clear correlation id before each test."""
        clear_correlation_id()

    def test_given_id_when_set_then_can_retrieve(self) -> None:
        """Correlation id can be set and retrieved."""
        # When
        result = set_correlation_id("schema-build")

        # Then
        assert result == "schema-build"
        assert get_correlation_id() == "schema-build"

    def test_given_no_id_when_set_then_generates_one(self) -> None:
        """Set generates a short uuid-based id when none provided."""
        rid = set_correlation_id()
        assert len(rid) == 12

    def test_given_set_id_when_clear_then_removes_id(self) -> None:
        """Clear removes the current id."""
        set_correlation_id("to-clear")
        clear_correlation_id()
        assert get_correlation_id() is None


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
        clear_correlation_id()

    def teardown_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_file_output_when_log_then_fields_rendered(self, tmp_path: Path) -> None:
        """JSON output carries event, level, timestamp and bound keys."""
        # Given
        log_file = tmp_path / "rowfields.log"
        configure_logging(
            config=LoggingConfig(
                level="INFO",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        set_correlation_id("abc123")

        # When
        get_logger("test").info("schema ready", table="Orders")

        # Then
        content = log_file.read_text()
        assert '"event": "schema ready"' in content
        assert '"table": "Orders"' in content
        assert '"level": "info"' in content
        assert '"correlation_id": "abc123"' in content
        assert "timestamp" in content

    def test_given_multi_output_config_when_configure_then_levels_respected(
        self, tmp_path: Path
    ) -> None:
        """Each output filters by its own level."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content
        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_debug_level_when_field_registered_then_logged(self, tmp_path: Path) -> None:
        """Schema building emits debug events for each registered field."""
        # Given
        log_file = tmp_path / "schema.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        fields = RowFields(table_name="Orders")

        # When
        Int32Field("OrderId", fields=fields)

        # Then
        content = log_file.read_text()
        assert "field_registered" in content
        assert '"field": "OrderId"' in content

    def test_given_file_output_when_reconfigured_then_old_handler_closed(
        self, tmp_path: Path
    ) -> None:
        """Reconfiguring releases the previous file handles."""
        # Given
        config = LoggingConfig(
            outputs=[LogOutputConfig(format="json", destination=str(tmp_path / "a.log"))]
        )
        configure_logging(config=config)
        (first,) = logging.getLogger().handlers
        assert isinstance(first, logging.FileHandler)

        # When
        configure_logging(config=config)

        # Then
        assert first not in logging.getLogger().handlers
        assert first.stream is None
        assert len(logging.getLogger().handlers) == 1
