"""Concrete field kinds.

The set is closed: one class per ``FieldType``. ``GenericValueField`` holds the
shared value contract; subclasses declare their Python value type, the pydantic
type used to convert foreign values, and which JSON token kinds they accept.
"""

from __future__ import annotations

import base64
import binascii
import functools
from collections.abc import Sequence
from datetime import datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar
from uuid import UUID

from pydantic import TypeAdapter, ValidationError, conint

from rowfields.core.errors import ConversionError, DeserializationError
from rowfields.data.field import INVARIANT_FORMAT, Field, FormatProvider
from rowfields.data.types import FieldFlags, FieldType
from rowfields.localization import LocalText

if TYPE_CHECKING:
    from rowfields.data.fields import RowFields
    from rowfields.data.row import Row

# JSON token kinds, named after the reader tokens they correspond to
NULL = "Null"
BOOLEAN = "Boolean"
INTEGER = "Integer"
FLOAT = "Float"
STRING = "String"
START_ARRAY = "StartArray"
START_OBJECT = "StartObject"


def token_kind(value: Any) -> str:
    """Token kind of a decoded JSON value."""
    if value is None:
        return NULL
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, float):
        return FLOAT
    if isinstance(value, str):
        return STRING
    if isinstance(value, (list, tuple)):
        return START_ARRAY
    if isinstance(value, dict):
        return START_OBJECT
    return type(value).__name__


@functools.cache
def _adapter(field_cls: type[GenericValueField]) -> TypeAdapter[Any]:
    return TypeAdapter(field_cls.adapter_type or field_cls.value_type)


class GenericValueField(Field):
    """Shared value handling for all concrete field kinds."""

    field_type: ClassVar[FieldType]
    value_type: ClassVar[type]
    adapter_type: ClassVar[Any] = None  # defaults to value_type
    json_tokens: ClassVar[frozenset[str]]

    def __init__(
        self,
        name: str,
        caption: str | LocalText | None = None,
        size: int = 0,
        flags: FieldFlags = FieldFlags.DEFAULT,
        *,
        fields: RowFields | None = None,
        **options: Any,
    ) -> None:
        super().__init__(fields, self.field_type, name, caption, size, flags, **options)

    # -- row access -----------------------------------------------------------

    def get_value(self, row: Row) -> Any:
        return row.get_field_value(self)

    def set_value(self, row: Row, value: Any) -> None:
        if value is not None and not self._is_value(value):
            value = self.convert_value(value)
        row.set_field_value(self, value)

    def is_null(self, row: Row) -> bool:
        return row.get_field_value(self) is None

    def copy(self, source: Row, target: Row) -> None:
        target.set_field_value(self, source.get_field_value(self))

    def index_compare(self, row1: Row, row2: Row) -> int:
        v1 = row1.get_field_value(self)
        v2 = row2.get_field_value(self)
        if v1 is None or v2 is None:
            return (v1 is not None) - (v2 is not None)
        return (v1 > v2) - (v1 < v2)

    def _is_value(self, value: Any) -> bool:
        """True when ``value`` can be stored as is, without conversion."""
        if self.adapter_type is not None:
            # constrained kinds (int ranges) validate even native values
            return False
        if isinstance(value, bool) and self.value_type is not bool:
            return False
        return isinstance(value, self.value_type)

    # -- conversion -----------------------------------------------------------

    def convert_value(self, source: Any, provider: FormatProvider | None = None) -> Any:
        """Convert ``source`` to this field's value type.

        Text is stripped (blank means None) and normalized with ``provider``
        before validation.

        Raises:
            ConversionError: The value cannot represent this field's type.
        """
        if source is None:
            return None
        if isinstance(source, str):
            text = source.strip()
            if not text:
                return None
            source = self._parse_text(text, provider or INVARIANT_FORMAT)
        source = self._coerce(source)
        try:
            return _adapter(type(self)).validate_python(source)
        except ValidationError as e:
            raise ConversionError.invalid_value(self.name, source, e.errors()[0]["msg"]) from e

    def _parse_text(self, text: str, provider: FormatProvider) -> Any:
        return text

    def _coerce(self, source: Any) -> Any:
        return source

    # -- JSON -----------------------------------------------------------------

    def value_to_json(self, row: Row) -> Any:
        value = row.get_field_value(self)
        return None if value is None else self._to_json(value)

    def value_from_json(self, value: Any, row: Row) -> None:
        token = token_kind(value)
        if token == NULL:
            self.set_value(row, None)
            return
        if token not in self.json_tokens:
            raise DeserializationError.unexpected_token(self.name, token)
        self.set_value(row, self._from_json(value))

    def _to_json(self, value: Any) -> Any:
        return value

    def _from_json(self, value: Any) -> Any:
        return self.convert_value(value)

    # -- data reader ----------------------------------------------------------

    def get_from_reader(self, reader: Sequence[Any], index: int, row: Row) -> None:
        raw = reader[index]
        self.set_value(row, None if raw is None else self._from_db(raw))

    def _from_db(self, raw: Any) -> Any:
        if self._is_value(raw):
            return raw
        return self.convert_value(raw)


class _NumericField(GenericValueField):
    json_tokens = frozenset({INTEGER, FLOAT, STRING})

    def _parse_text(self, text: str, provider: FormatProvider) -> Any:
        if provider.group_separator:
            text = text.replace(provider.group_separator, "")
        if provider.decimal_separator != ".":
            text = text.replace(provider.decimal_separator, ".")
        return text


class BooleanField(GenericValueField):
    field_type = FieldType.BOOLEAN
    value_type = bool
    json_tokens = frozenset({BOOLEAN, INTEGER})

    def _from_db(self, raw: Any) -> Any:
        # SQLite and friends hand back 0/1
        if isinstance(raw, int):
            return bool(raw)
        return super()._from_db(raw)


class Int16Field(_NumericField):
    field_type = FieldType.INT16
    value_type = int
    adapter_type = conint(ge=-(2**15), le=2**15 - 1)


class Int32Field(_NumericField):
    field_type = FieldType.INT32
    value_type = int
    adapter_type = conint(ge=-(2**31), le=2**31 - 1)


class Int64Field(_NumericField):
    field_type = FieldType.INT64
    value_type = int
    adapter_type = conint(ge=-(2**63), le=2**63 - 1)


class DoubleField(_NumericField):
    field_type = FieldType.DOUBLE
    value_type = float


class DecimalField(_NumericField):
    field_type = FieldType.DECIMAL
    value_type = Decimal

    def _coerce(self, source: Any) -> Any:
        # go through repr so 0.1 becomes Decimal("0.1"), not its binary expansion
        if isinstance(source, float):
            return repr(source)
        return source

    def _to_json(self, value: Decimal) -> Any:
        as_float = float(value)
        if Decimal(repr(as_float)) == value:
            return as_float
        return str(value)


class StringField(GenericValueField):
    """Text column. ``TRIM`` trims to None, ``TRIM_TO_EMPTY`` trims to ""."""

    field_type = FieldType.STRING
    value_type = str
    json_tokens = frozenset({STRING, INTEGER, FLOAT})

    def convert_value(self, source: Any, provider: FormatProvider | None = None) -> Any:
        if source is None:
            return None
        if isinstance(source, bytes):
            return source.decode("utf-8")
        return str(source)

    def set_value(self, row: Row, value: Any) -> None:
        if value is not None and not isinstance(value, str):
            value = self.convert_value(value)
        if (self.flags & FieldFlags.TRIM_TO_EMPTY) == FieldFlags.TRIM_TO_EMPTY:
            value = (value or "").strip()
        elif self.flags & FieldFlags.TRIM and value is not None:
            value = value.strip() or None
        row.set_field_value(self, value)


class DateTimeField(GenericValueField):
    field_type = FieldType.DATETIME
    value_type = datetime
    json_tokens = frozenset({STRING})

    def _parse_text(self, text: str, provider: FormatProvider) -> Any:
        if provider.datetime_format is None:
            return text
        try:
            return datetime.strptime(text, provider.datetime_format)
        except ValueError as e:
            raise ConversionError.invalid_value(self.name, text, str(e)) from e

    def _to_json(self, value: datetime) -> Any:
        return value.isoformat()


class TimeSpanField(GenericValueField):
    """Duration stored as ``timedelta``; JSON carries total seconds."""

    field_type = FieldType.TIME
    value_type = timedelta
    json_tokens = frozenset({INTEGER, FLOAT, STRING})

    def _to_json(self, value: timedelta) -> Any:
        return value.total_seconds()


class GuidField(GenericValueField):
    field_type = FieldType.GUID
    value_type = UUID
    json_tokens = frozenset({STRING})

    def _to_json(self, value: UUID) -> Any:
        return str(value)


class StreamField(GenericValueField):
    """Binary column; JSON carries base64 text."""

    field_type = FieldType.STREAM
    value_type = bytes
    json_tokens = frozenset({STRING})

    def _to_json(self, value: bytes) -> Any:
        return base64.b64encode(value).decode("ascii")

    def _from_json(self, value: str) -> Any:
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ConversionError.invalid_value(self.name, value, str(e)) from e

    def _from_db(self, raw: Any) -> Any:
        if isinstance(raw, (bytearray, memoryview)):
            return bytes(raw)
        return super()._from_db(raw)


FIELD_CLASSES: dict[FieldType, type[GenericValueField]] = {
    cls.field_type: cls
    for cls in (
        BooleanField,
        Int16Field,
        Int32Field,
        Int64Field,
        DoubleField,
        DecimalField,
        StringField,
        DateTimeField,
        TimeSpanField,
        GuidField,
        StreamField,
    )
}
"""Concrete field class for each FieldType."""


def create_field(
    field_type: FieldType,
    name: str,
    caption: str | LocalText | None = None,
    size: int = 0,
    flags: FieldFlags = FieldFlags.DEFAULT,
    **options: Any,
) -> GenericValueField:
    """Instantiate the concrete field class registered for ``field_type``."""
    return FIELD_CLASSES[field_type](name, caption, size, flags, **options)
