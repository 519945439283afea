"""Field descriptors: per-column metadata of a row schema.

A ``Field`` describes one column (or computed SQL expression) of a row type:
name, value kind, size, flags, caption, default value, foreign key wiring and
the join it reads through. Fields are registered into a ``RowFields``
collection, which assigns their index.

Fields are also Python descriptors, so declaring them on a ``Row`` subclass
makes ``row.customer_id`` read and write that row's value.

Derived state (``referenced_joins``, ``join_alias``, ``origin``, ``join``) is
only ever reset and recomputed by the ``expression`` setter.

Thread safety: fields are built once while the schema is constructed and are
read-only afterwards. The ``join`` lookup caches without a lock; two racing
first reads both perform the same idempotent lookup and store the same join.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, overload

import structlog

from rowfields.config.constants import (
    FIELD_TEXT_KEY_ROOT,
    FOREIGN_JOIN_PREFIX,
    PRIMARY_TABLE_ALIAS,
)
from rowfields.core.errors import SchemaError
from rowfields.data.identifiers import is_valid_identifier, locate_join_aliases, table_alias
from rowfields.data.joins import Join, LeftJoin, column_ref
from rowfields.data.types import FieldFlags, FieldType, SelectLevel
from rowfields.localization import LocalText

if TYPE_CHECKING:
    from rowfields.data.fields import RowFields
    from rowfields.data.row import Row

log = structlog.get_logger()


def trim_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True, slots=True)
class FormatProvider:
    """Culture-like formatting rules for converting text to values."""

    decimal_separator: str = "."
    group_separator: str = ","
    datetime_format: str | None = None  # strptime format; None means ISO 8601


INVARIANT_FORMAT = FormatProvider()


class Field(ABC):
    """Abstract column descriptor. Concrete value kinds live in field_types."""

    def __init__(
        self,
        fields: RowFields | None,
        field_type: FieldType,
        name: str,
        caption: str | LocalText | None = None,
        size: int = 0,
        flags: FieldFlags = FieldFlags.DEFAULT,
        *,
        scale: int = 0,
        property_name: str | None = None,
        expression: str | None = None,
        foreign_table: str | None = None,
        foreign_field: str | None = None,
        default_value: Any = None,
    ) -> None:
        self._name = name
        self._type = field_type
        self._index = -1
        self._fields: RowFields | None = None
        self._caption = caption
        self._auto_text_key: str | None = None

        self.size = size
        self.scale = scale
        self.flags = flags
        self.property_name = property_name
        self.default_value = default_value
        self.row_type: type[Row] | None = None
        self.attr_name: str | None = None
        self.min_select_level = SelectLevel.DEFAULT
        self.natural_order = 0

        self._expression: str | None = None
        self._referenced_joins: set[str] | None = None
        self._join_alias: str | None = None
        self._origin: str | None = None
        self._join: Join | None = None
        self.expression = expression

        self._foreign_table: str | None = None
        self._foreign_field: str | None = None
        self.foreign_table = foreign_table
        self.foreign_field = foreign_field

        if fields is not None:
            fields.add(self)

    # -- identity -------------------------------------------------------------

    @property
    def fields(self) -> RowFields | None:
        """The collection this field is registered in."""
        return self._fields

    @property
    def index(self) -> int:
        """Position in the owning collection; -1 until registered."""
        return self._index

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> FieldType:
        return self._type

    def _attach(self, fields: RowFields, index: int) -> None:
        if self._index >= 0:
            raise SchemaError.already_registered(self._name, self._index)
        self._fields = fields
        self._index = index

    # -- presentation ---------------------------------------------------------

    @property
    def caption(self) -> str | LocalText | None:
        """Literal text (``str``) or a localizable ``LocalText`` key."""
        return self._caption

    @caption.setter
    def caption(self, value: str | LocalText | None) -> None:
        self._caption = value

    @property
    def title(self) -> str:
        """Display text: the caption, else the localized ``Db.<prefix>.<field>`` text."""
        if self._caption is not None:
            return str(self._caption)

        fallback = self.property_name or self._name
        if self._fields is None:
            return fallback
        if self._auto_text_key is None:
            self._auto_text_key = (
                f"{FIELD_TEXT_KEY_ROOT}.{self._fields.local_text_prefix}.{fallback}"
            )
        # Looked up on every read so a language switch shows up immediately
        text = LocalText.try_get(self._auto_text_key)
        return fallback if text is None else text

    # -- expression and joins -------------------------------------------------

    @property
    def expression(self) -> str | None:
        return self._expression

    @expression.setter
    def expression(self, value: str | None) -> None:
        value = trim_to_none(value)
        if value == self._expression:
            return

        self._expression = value
        self._referenced_joins = None
        self._join_alias = None
        self._origin = None
        self._join = None

        if value is None:
            return

        aliases = locate_join_aliases(value)
        if not aliases:
            return
        self._referenced_joins = aliases

        if len(aliases) == 1:
            (alias,) = aliases
            parts = value.split(".")
            if len(parts) == 2 and parts[0] == alias and is_valid_identifier(parts[1]):
                self._join_alias = alias
                self._origin = parts[1]

    @property
    def referenced_joins(self) -> set[str] | None:
        """Join aliases the expression mentions; None without an expression."""
        return self._referenced_joins

    @property
    def join_alias(self) -> str | None:
        """Alias when the expression is exactly ``alias.column``."""
        return self._join_alias

    @property
    def origin(self) -> str | None:
        """Column name in the joined table when ``join_alias`` is set."""
        return self._origin

    @property
    def query_expression(self) -> str:
        return self._expression or f"{PRIMARY_TABLE_ALIAS}.{self._name}"

    @property
    def join(self) -> Join | None:
        if self._join is None and self._join_alias is not None and self._fields is not None:
            # misses are not cached; a join added later resolves on the next read
            self._join = self._fields.joins.get(self._join_alias)
            if self._join is None:
                log.debug("join_unresolved", field=self._name, alias=self._join_alias)
        return self._join

    @property
    def foreign_table(self) -> str | None:
        return self._foreign_table

    @foreign_table.setter
    def foreign_table(self, value: str | None) -> None:
        self._foreign_table = trim_to_none(value)

    @property
    def foreign_field(self) -> str | None:
        return self._foreign_field

    @foreign_field.setter
    def foreign_field(self, value: str | None) -> None:
        self._foreign_field = trim_to_none(value)

    def foreign_join(self, foreign_index: int | None = None) -> LeftJoin:
        """Build (without registering) a LEFT JOIN to ``foreign_table`` on this key.

        The alias is ``j`` + the name without its ``Id``/``_ID`` suffix, or the
        positional table alias when ``foreign_index`` is given.

        Raises:
            SchemaError: ``foreign_table`` is not set.
        """
        if not self._foreign_table:
            raise SchemaError.missing_foreign_table(self._name)

        if foreign_index is None:
            alias = self._name
            if alias.endswith("Id"):
                alias = alias[:-2]
            elif alias.upper().endswith("_ID"):
                alias = alias[:-3]
            alias = FOREIGN_JOIN_PREFIX + alias
        else:
            alias = table_alias(foreign_index)

        key_field = self._foreign_field or self._name
        criteria = column_ref(alias, key_field) == column_ref(PRIMARY_TABLE_ALIAS, self._name)
        log.debug("foreign_join_built", field=self._name, table=self._foreign_table, alias=alias)
        return LeftJoin(None, self._foreign_table, alias, criteria)

    # -- row binding ----------------------------------------------------------

    def on_row_initialization(self, row: Row) -> None:
        """Called once per new row; seeds ``default_value`` without marking it assigned."""
        if self.default_value is not None:
            row.init_field_value(self, self.default_value)

    def copy_no_assignment(self, source: Row, target: Row) -> None:
        self.copy(source, target)
        target.clear_assignment(self)

    def __set_name__(self, owner: type, name: str) -> None:
        self.attr_name = name

    @overload
    def __get__(self, row: None, owner: type | None = None) -> Field: ...

    @overload
    def __get__(self, row: Row, owner: type | None = None) -> Any: ...

    def __get__(self, row: Row | None, owner: type | None = None) -> Any:
        if row is None:
            return self
        return self.get_value(row)

    def __set__(self, row: Row, value: Any) -> None:
        self.set_value(row, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, index={self._index})"

    # -- value contract -------------------------------------------------------

    @property
    @abstractmethod
    def value_type(self) -> type: ...

    @abstractmethod
    def value_to_json(self, row: Row) -> Any:
        """This field's value in ``row`` as a JSON-compatible value."""

    @abstractmethod
    def value_from_json(self, value: Any, row: Row) -> None:
        """Store a decoded JSON value; raises DeserializationError on a wrong token."""

    @abstractmethod
    def copy(self, source: Row, target: Row) -> None: ...

    @abstractmethod
    def get_from_reader(self, reader: Sequence[Any], index: int, row: Row) -> None:
        """Read column ``index`` of a result row into ``row``."""

    @abstractmethod
    def convert_value(self, source: Any, provider: FormatProvider | None = None) -> Any: ...

    @abstractmethod
    def index_compare(self, row1: Row, row2: Row) -> int: ...

    @abstractmethod
    def get_value(self, row: Row) -> Any: ...

    @abstractmethod
    def set_value(self, row: Row, value: Any) -> None: ...

    @abstractmethod
    def is_null(self, row: Row) -> bool: ...
