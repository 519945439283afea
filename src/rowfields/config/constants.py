"""Configuration constants.

Values here are naming conventions of generated SQL and text keys. They are not
user-configurable; see models.py for configurable values.
"""

CONFIG_FILE_NAME = "rowfields.yaml"
"""Default YAML config file looked up in the working directory."""

# =============================================================================
# SQL alias conventions
# =============================================================================

PRIMARY_TABLE_ALIAS = "T0"
"""Alias of the primary (un-joined) table in generated queries."""

TABLE_ALIAS_PREFIX = "T"
"""Prefix of positional table aliases (T0, T1, ...)."""

FOREIGN_JOIN_PREFIX = "j"
"""Prefix of join aliases derived from foreign key field names."""

# =============================================================================
# Local text conventions
# =============================================================================

FIELD_TEXT_KEY_ROOT = "Db"
"""First segment of derived field title keys: Db.<prefix>.<field>."""

INVARIANT_LANGUAGE = ""
"""Language id of texts that apply when no language-specific text exists."""
