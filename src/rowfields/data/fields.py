"""Ordered field collection owning the fields and joins of one row schema."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import structlog

from rowfields.core.errors import SchemaError
from rowfields.data.types import FieldFlags

if TYPE_CHECKING:
    from rowfields.data.field import Field
    from rowfields.data.joins import Join
    from rowfields.data.row import Row

log = structlog.get_logger()


class RowFields:
    """Schema of a row type: its fields in registration order plus its join table.

    Field names are unique ignoring case, since they map to SQL column names.
    After ``initialize()`` the schema is published and refuses new fields.
    """

    def __init__(
        self,
        table_name: str | None = None,
        local_text_prefix: str | None = None,
        connection_key: str | None = None,
    ) -> None:
        self.table_name = table_name
        self.connection_key = connection_key
        self.joins: dict[str, Join] = {}
        self.row_type: type[Row] | None = None
        self._local_text_prefix = local_text_prefix
        self._fields: list[Field] = []
        self._by_name: dict[str, Field] = {}
        self._initialized = False

    @property
    def local_text_prefix(self) -> str:
        """Middle segment of derived field text keys; defaults to the table name."""
        return self._local_text_prefix or self.table_name or ""

    @local_text_prefix.setter
    def local_text_prefix(self, value: str | None) -> None:
        self._local_text_prefix = value

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def add(self, field: Field) -> None:
        """Register ``field`` and assign its index.

        Raises:
            SchemaError: duplicate name, field already registered, or schema initialized.
        """
        if self._initialized:
            raise SchemaError.schema_initialized(self.table_name)
        key = field.name.casefold()
        if key in self._by_name:
            raise SchemaError.duplicate_field(field.name, self.table_name)
        field._attach(self, len(self._fields))
        self._fields.append(field)
        self._by_name[key] = field
        log.debug("field_registered", table=self.table_name, field=field.name, index=field.index)

    def add_join(self, join: Join) -> Join:
        if join.alias in self.joins:
            raise SchemaError.duplicate_join(join.alias, self.table_name)
        self.joins[join.alias] = join
        return join

    def initialize(self, row_type: type[Row] | None = None) -> None:
        """Publish the schema. Binds every field to ``row_type``; idempotent."""
        if self._initialized:
            return
        self.row_type = row_type
        for field in self._fields:
            field.row_type = row_type
        self._initialized = True
        log.info(
            "schema_initialized",
            table=self.table_name,
            row_type=row_type.__name__ if row_type else None,
            fields=len(self._fields),
            joins=len(self.joins),
        )

    # -- lookup ---------------------------------------------------------------

    def find(self, name: str) -> Field | None:
        """Field by name (ignoring case), else by property name, else None."""
        field = self._by_name.get(name.casefold())
        if field is not None:
            return field
        for field in self._fields:
            if field.property_name == name:
                return field
        return None

    def by_name(self, name: str) -> Field:
        field = self._by_name.get(name.casefold())
        if field is None:
            raise SchemaError.unknown_field(name, self.table_name)
        return field

    def by_property_name(self, name: str) -> Field:
        for field in self._fields:
            if (field.property_name or field.name) == name:
                return field
        raise SchemaError.unknown_field(name, self.table_name)

    def by_attr_name(self, attr_name: str) -> Field | None:
        for field in self._fields:
            if field.attr_name == attr_name:
                return field
        return None

    @property
    def primary_keys(self) -> list[Field]:
        return [f for f in self._fields if f.flags & FieldFlags.PRIMARY_KEY]

    @property
    def identity_field(self) -> Field | None:
        for field in self._fields:
            if field.flags & FieldFlags.AUTO_INCREMENT:
                return field
        return None

    def __getitem__(self, key: int | str) -> Field:
        if isinstance(key, int):
            try:
                return self._fields[key]
            except IndexError:
                raise SchemaError.unknown_field(key, self.table_name) from None
        return self.by_name(key)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, item: object) -> bool:
        return any(item is field for field in self._fields)

    def __repr__(self) -> str:
        return f"RowFields({self.table_name!r}, fields={len(self._fields)})"
