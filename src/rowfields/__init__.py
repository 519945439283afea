"""rowfields - typed, join-aware column metadata for row schemas."""

from rowfields.data import (
    BooleanField,
    DateTimeField,
    DecimalField,
    DoubleField,
    Field,
    FieldFlags,
    FieldType,
    FormatProvider,
    GuidField,
    InnerJoin,
    Int16Field,
    Int32Field,
    Int64Field,
    Join,
    LeftJoin,
    Row,
    RowFields,
    SelectLevel,
    StreamField,
    StringField,
    TimeSpanField,
)
from rowfields.localization import LocalText

__version__ = "0.1.0"

__all__ = [
    "BooleanField",
    "DateTimeField",
    "DecimalField",
    "DoubleField",
    "Field",
    "FieldFlags",
    "FieldType",
    "FormatProvider",
    "GuidField",
    "InnerJoin",
    "Int16Field",
    "Int32Field",
    "Int64Field",
    "Join",
    "LeftJoin",
    "LocalText",
    "Row",
    "RowFields",
    "SelectLevel",
    "StreamField",
    "StringField",
    "TimeSpanField",
    "__version__",
]
