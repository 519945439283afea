"""Config module exports."""

from rowfields.config.loader import RowFieldsSettings, apply_config, load_config
from rowfields.config.models import (
    LocalizationConfig,
    LoggingConfig,
    LogOutputConfig,
    RowFieldsConfig,
)

__all__ = [
    "apply_config",
    "load_config",
    "LocalizationConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "RowFieldsConfig",
    "RowFieldsSettings",
]
