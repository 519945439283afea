"""rowfields error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Schema (field/join metadata authoring mistakes)
- 4xxx: Values (deserialization, conversion)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2003

    # Schema (3xxx)
    SCHEMA_MISSING_FOREIGN_TABLE = 3001
    SCHEMA_DUPLICATE_FIELD = 3002
    SCHEMA_DUPLICATE_JOIN = 3003
    SCHEMA_INVALID_IDENTIFIER = 3004
    SCHEMA_ALREADY_REGISTERED = 3005
    SCHEMA_INITIALIZED = 3006
    SCHEMA_UNKNOWN_FIELD = 3007

    # Values (4xxx)
    VALUE_UNEXPECTED_TOKEN = 4001
    VALUE_UNKNOWN_PROPERTY = 4002
    VALUE_CONVERSION_FAILED = 4003


@dataclass(eq=False)
class RowFieldsError(Exception):
    """Base error with structured context.

    Fields are read-only by convention. The dataclass is not frozen: the
    interpreter and context managers assign ``__traceback__`` on raise paths.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SCHEMA_DUPLICATE_FIELD')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(RowFieldsError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class SchemaError(RowFieldsError):
    """Invalid or missing field/join metadata at the point of use.

    Signals a schema-authoring mistake; not recoverable by retrying.
    """

    @classmethod
    def missing_foreign_table(cls, field: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_MISSING_FOREIGN_TABLE,
            message=f"Field '{field}' has no foreign_table to join",
            details={"field": field, "argument": "foreign_table"},
        )

    @classmethod
    def duplicate_field(cls, field: str, table: str | None) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_DUPLICATE_FIELD,
            message=f"Field '{field}' is already registered in '{table}'",
            details={"field": field, "table": table},
        )

    @classmethod
    def duplicate_join(cls, alias: str, table: str | None) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_DUPLICATE_JOIN,
            message=f"Join alias '{alias}' is already registered in '{table}'",
            details={"alias": alias, "table": table},
        )

    @classmethod
    def invalid_identifier(cls, identifier: str, role: str) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_INVALID_IDENTIFIER,
            message=f"Invalid {role} identifier: '{identifier}'",
            details={"identifier": identifier, "role": role},
        )

    @classmethod
    def already_registered(cls, field: str, index: int) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_ALREADY_REGISTERED,
            message=f"Field '{field}' already has index {index}",
            details={"field": field, "index": index},
        )

    @classmethod
    def schema_initialized(cls, table: str | None) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_INITIALIZED,
            message=f"Schema '{table}' is initialized and no longer accepts registrations",
            details={"table": table},
        )

    @classmethod
    def unknown_field(cls, name: str | int, table: str | None) -> "SchemaError":
        return cls(
            code=ErrorCode.SCHEMA_UNKNOWN_FIELD,
            message=f"No field '{name}' in '{table}'",
            details={"field": str(name), "table": table},
        )


class DeserializationError(RowFieldsError):
    """Unexpected input while reading a row from a structured format."""

    @classmethod
    def unexpected_token(cls, field: str, token: str) -> "DeserializationError":
        return cls(
            code=ErrorCode.VALUE_UNEXPECTED_TOKEN,
            message=f"Unexpected token when deserializing row: {token}",
            details={"field": field, "token": token},
        )

    @classmethod
    def unknown_property(cls, name: str, table: str | None) -> "DeserializationError":
        return cls(
            code=ErrorCode.VALUE_UNKNOWN_PROPERTY,
            message=f"Unknown property '{name}' when deserializing '{table}' row",
            details={"property": name, "table": table},
        )


class ConversionError(RowFieldsError):
    """A source value could not be converted to a field's value type."""

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConversionError":
        return cls(
            code=ErrorCode.VALUE_CONVERSION_FAILED,
            message=f"Cannot convert {value!r} for field '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

