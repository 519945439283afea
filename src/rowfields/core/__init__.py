"""Core module exports."""

from rowfields.core.errors import (
    ConfigError,
    ConversionError,
    DeserializationError,
    ErrorCode,
    RowFieldsError,
    SchemaError,
)
from rowfields.core.logging import (
    clear_correlation_id,
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ConversionError",
    "DeserializationError",
    "ErrorCode",
    "RowFieldsError",
    "SchemaError",
    # Logging
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
]
