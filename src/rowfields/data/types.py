"""Enumerations shared by field descriptors."""

from enum import Enum, IntEnum, IntFlag


class FieldType(str, Enum):
    """Value kind of a field. One concrete field class exists per member."""

    BOOLEAN = "boolean"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    DOUBLE = "double"
    DECIMAL = "decimal"
    STRING = "string"
    DATETIME = "datetime"
    TIME = "time"  # duration / time of day as timedelta
    GUID = "guid"
    STREAM = "stream"  # binary

    @property
    def is_numeric(self) -> bool:
        return self in (
            FieldType.INT16,
            FieldType.INT32,
            FieldType.INT64,
            FieldType.DOUBLE,
            FieldType.DECIMAL,
        )


class FieldFlags(IntFlag):
    """Behavioral modifiers of a field."""

    NONE = 0
    INSERTABLE = 1
    UPDATABLE = 2
    NOT_NULL = 4
    PRIMARY_KEY = 8
    AUTO_INCREMENT = 16
    FOREIGN = 32
    CALCULATED = 64
    REFLECTIVE = 128
    NOT_MAPPED = 256
    TRIM = 512
    TRIM_TO_EMPTY = 1024 | TRIM
    DENY_FILTERING = 2048
    UNIQUE = 4096

    DEFAULT = INSERTABLE | UPDATABLE | TRIM
    REQUIRED = DEFAULT | NOT_NULL
    IDENTITY = PRIMARY_KEY | AUTO_INCREMENT | NOT_NULL


class SelectLevel(IntEnum):
    """Minimum query tier at which a field is selected by default."""

    DEFAULT = 0
    ALWAYS = 1
    LOOKUP = 2
    LIST = 3
    DETAILS = 4
    EXPLICIT = 5
    NEVER = 6
