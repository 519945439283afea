"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (ROWFIELDS__SECTION__KEY)
3. YAML config file (rowfields.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    ROWFIELDS__<SECTION>__<KEY>=<VALUE>

Examples:
    ROWFIELDS__LOGGING__LEVEL=DEBUG
    ROWFIELDS__LOCALIZATION__DEFAULT_LANGUAGE=de
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        ROWFIELDS__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every field registration and join lookup.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class LocalizationConfig(BaseModel):
    """Local text configuration.

    Env vars:
        ROWFIELDS__LOCALIZATION__DEFAULT_LANGUAGE: Language used when none is set
    """

    default_language: str = Field(
        default="",
        description="Language id used when the current context has none. "
        "Empty string is the invariant language.",
    )
    text_files: list[str] = Field(
        default_factory=list,
        description="YAML files of {language: {key: text}} loaded by apply_config().",
    )

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        return v.strip()


class RowFieldsConfig(BaseModel):
    """Root configuration for rowfields.

    All settings can be configured via:
    1. Environment variables: ROWFIELDS__SECTION__KEY
    2. YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    localization: LocalizationConfig = Field(default_factory=LocalizationConfig)
