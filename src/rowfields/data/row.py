"""Row container: per-field value storage bound to a declared schema.

Declaring a row type::

    class OrderRow(Row):
        table_name = "Orders"

        order_id = Int32Field("OrderId", flags=FieldFlags.IDENTITY)
        customer_id = Int32Field("CustomerId", foreign_table="Customers")
        customer_name = StringField("CustomerName", expression="jCustomer.Name")

        joins = (customer_id.foreign_join(),)

Each class gets its own ``RowFields`` in ``OrderRow.fields``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from rowfields.core.errors import DeserializationError, SchemaError
from rowfields.data.field import Field
from rowfields.data.fields import RowFields
from rowfields.data.field_types import token_kind
from rowfields.data.joins import Join


class Row:
    """Base class for row types. Subclasses declare fields as class attributes."""

    fields: ClassVar[RowFields]
    table_name: ClassVar[str | None] = None
    local_text_prefix: ClassVar[str | None] = None
    joins: ClassVar[Sequence[Join]] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = [value for value in vars(cls).values() if isinstance(value, Field)]
        if not declared:
            # abstract intermediate class, or a subclass reusing its parent's schema
            return
        inherited = getattr(cls, "fields", None)
        if inherited is not None:
            # fields belong to exactly one schema, so a parent's cannot be shared
            raise SchemaError.schema_initialized(inherited.table_name)

        table_name = cls.table_name if "table_name" in vars(cls) else None
        fields = RowFields(
            table_name=table_name or cls.__name__.removesuffix("Row"),
            local_text_prefix=cls.local_text_prefix,
        )
        for field in declared:
            fields.add(field)
        for join in cls.joins:
            fields.add_join(join)
        fields.initialize(cls)
        cls.fields = fields

    def __init__(self, *, track_assignments: bool = False, **values: Any) -> None:
        fields = self._schema()
        self._values: list[Any] = [None] * len(fields)
        self._assigned: set[int] = set()
        self.track_assignments = track_assignments
        for field in fields:
            field.on_row_initialization(self)
        for attr, value in values.items():
            field = fields.by_attr_name(attr)
            if field is None:
                raise SchemaError.unknown_field(attr, fields.table_name)
            field.set_value(self, value)

    @classmethod
    def _schema(cls) -> RowFields:
        fields = getattr(cls, "fields", None)
        if fields is None:
            raise TypeError(f"{cls.__name__} declares no fields")
        return fields

    # -- value storage --------------------------------------------------------

    def _slot(self, field: Field) -> int:
        if field.fields is not self._schema():
            raise SchemaError.unknown_field(field.name, self._schema().table_name)
        return field.index

    def get_field_value(self, field: Field) -> Any:
        return self._values[self._slot(field)]

    def set_field_value(self, field: Field, value: Any) -> None:
        """Store a value; marks the field assigned while tracking assignments."""
        slot = self._slot(field)
        self._values[slot] = value
        if self.track_assignments:
            self._assigned.add(slot)

    def init_field_value(self, field: Field, value: Any) -> None:
        """Store a value without touching assignment state."""
        self._values[self._slot(field)] = value

    def is_assigned(self, field: Field) -> bool:
        return self._slot(field) in self._assigned

    def clear_assignment(self, field: Field) -> None:
        self._assigned.discard(self._slot(field))

    def assigned_fields(self) -> list[Field]:
        return [field for field in self._schema() if field.index in self._assigned]

    # -- conversion -----------------------------------------------------------

    def clone(self) -> Row:
        clone = type(self)(track_assignments=self.track_assignments)
        for field in self._schema():
            field.copy(self, clone)
        clone._assigned = set(self._assigned)
        return clone

    def to_dict(self, assigned_only: bool = False) -> dict[str, Any]:
        """JSON-compatible mapping keyed by property name (or field name)."""
        data: dict[str, Any] = {}
        for field in self._schema():
            if assigned_only and field.index not in self._assigned:
                continue
            data[field.property_name or field.name] = field.value_to_json(self)
        return data

    def to_json(self, assigned_only: bool = False) -> str:
        return json.dumps(self.to_dict(assigned_only))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Row:
        """Build a row from decoded JSON; present keys end up assigned.

        Raises:
            DeserializationError: unknown key or a value of the wrong token kind.
        """
        fields = cls._schema()
        row = cls(track_assignments=True)
        for key, value in data.items():
            field = fields.find(key)
            if field is None:
                raise DeserializationError.unknown_property(key, fields.table_name)
            field.value_from_json(value, row)
        return row

    @classmethod
    def from_json(cls, text: str) -> Row:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise DeserializationError.unexpected_token(cls.__name__, token_kind(data))
        return cls.from_dict(data)

    @classmethod
    def from_reader(cls, reader: Sequence[Any], columns: Sequence[Field] | None = None) -> Row:
        """Materialize a row from a positional result row.

        ``columns`` names the field read at each position; defaults to every
        field in schema order.
        """
        row = cls()
        for position, field in enumerate(columns if columns is not None else cls._schema()):
            field.get_from_reader(reader, position, row)
        return row

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values == other._values  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        values = ", ".join(
            f"{field.attr_name or field.name}={self._values[field.index]!r}"
            for field in self._schema()
        )
        return f"{type(self).__name__}({values})"
