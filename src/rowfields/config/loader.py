"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (ROWFIELDS__SECTION__KEY)
3. YAML config file (rowfields.yaml in the working directory, or an explicit path)
4. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from rowfields.config.constants import CONFIG_FILE_NAME
from rowfields.config.models import LocalizationConfig, LoggingConfig, RowFieldsConfig
from rowfields.core.errors import ConfigError

log = structlog.get_logger()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with instance-based YAML source."""

    class RowFieldsSettings(BaseSettings):
        """Root config. Env vars: ROWFIELDS__LOGGING__LEVEL, etc."""

        model_config = SettingsConfigDict(
            env_prefix="ROWFIELDS__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        localization: LocalizationConfig = LocalizationConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml file
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return RowFieldsSettings


RowFieldsSettings = _make_settings_class({})


def load_config(config_path: Path | None = None, **kwargs: Any) -> RowFieldsConfig:
    """Load config: defaults < YAML file < env vars < kwargs.

    Args:
        config_path: YAML file to read. Defaults to ./rowfields.yaml; a missing
                     default file is ignored, a missing explicit file is an error.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit file, invalid YAML or validation errors.
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError.file_not_found(str(config_path))
    path = config_path or Path.cwd() / CONFIG_FILE_NAME
    yaml_config = _load_yaml(path)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return RowFieldsConfig.model_validate(settings.model_dump())


def apply_config(config: RowFieldsConfig) -> None:
    """Configure logging and the default local text registry from config."""
    from rowfields.core.logging import configure_logging
    from rowfields.localization import load_texts, local_texts

    configure_logging(config=config.logging)
    local_texts.default_language = config.localization.default_language
    for text_file in config.localization.text_files:
        load_texts(Path(text_file).expanduser())
    log.info(
        "config_applied",
        default_language=config.localization.default_language,
        text_files=len(config.localization.text_files),
    )
