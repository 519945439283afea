"""Load local texts from YAML files.

File layout is one mapping per language; nested mappings are flattened into
dotted keys::

    en:
      Db:
        Invoice:
          Amount: Amount
    de:
      Db.Invoice.Amount: Betrag

Use the empty string ``""`` as language id for invariant texts.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml

from rowfields.core.errors import ConfigError
from rowfields.localization.texts import LocalTextRegistry, local_texts

log = structlog.get_logger()


def flatten_texts(texts: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into ``{"a.b.c": text}``."""
    flat: dict[str, str] = {}
    for key, value in texts.items():
        full_key = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten_texts(value, full_key))
        elif value is not None:
            flat[full_key] = str(value)
    return flat


def load_texts(path: Path, registry: LocalTextRegistry | None = None) -> int:
    """Load a YAML text file into ``registry`` (default: the global one).

    Returns:
        Number of texts added.

    Raises:
        ConfigError: Missing file, invalid YAML, or a non-mapping document.
    """
    registry = registry if registry is not None else local_texts
    if not path.exists():
        raise ConfigError.file_not_found(str(path))
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e

    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "expected a mapping of language to texts")

    count = 0
    for language, texts in data.items():
        if not isinstance(texts, dict):
            raise ConfigError.parse_error(str(path), f"texts for language {language!r} must be a mapping")
        flat = flatten_texts(texts)
        registry.add_all(str(language or ""), flat)
        count += len(flat)

    log.info("local_texts_loaded", path=str(path), languages=len(data), texts=count)
    return count
