"""Row schema metadata: fields, joins and rows."""

from rowfields.data.field import INVARIANT_FORMAT, Field, FormatProvider, trim_to_none
from rowfields.data.field_types import (
    FIELD_CLASSES,
    BooleanField,
    DateTimeField,
    DecimalField,
    DoubleField,
    GenericValueField,
    GuidField,
    Int16Field,
    Int32Field,
    Int64Field,
    StreamField,
    StringField,
    TimeSpanField,
    create_field,
    token_kind,
)
from rowfields.data.fields import RowFields
from rowfields.data.identifiers import is_valid_identifier, locate_join_aliases, table_alias
from rowfields.data.joins import InnerJoin, Join, LeftJoin, column_ref
from rowfields.data.row import Row
from rowfields.data.types import FieldFlags, FieldType, SelectLevel

__all__ = [
    # Fields
    "Field",
    "FormatProvider",
    "INVARIANT_FORMAT",
    "trim_to_none",
    "GenericValueField",
    "BooleanField",
    "DateTimeField",
    "DecimalField",
    "DoubleField",
    "GuidField",
    "Int16Field",
    "Int32Field",
    "Int64Field",
    "StreamField",
    "StringField",
    "TimeSpanField",
    "FIELD_CLASSES",
    "create_field",
    "token_kind",
    # Schema
    "RowFields",
    "Row",
    # Joins
    "Join",
    "LeftJoin",
    "InnerJoin",
    "column_ref",
    # Identifiers
    "is_valid_identifier",
    "locate_join_aliases",
    "table_alias",
    # Enums
    "FieldFlags",
    "FieldType",
    "SelectLevel",
]
