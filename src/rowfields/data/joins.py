"""Join descriptors referenced by field expressions."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, ClassVar

from sqlalchemy import literal_column
from sqlalchemy.sql.elements import ColumnElement

from rowfields.config.constants import PRIMARY_TABLE_ALIAS
from rowfields.core.errors import SchemaError
from rowfields.data.identifiers import is_valid_identifier, locate_join_aliases


def column_ref(alias: str, column: str) -> ColumnElement[Any]:
    """Raw ``alias.column`` reference usable in SQLAlchemy expressions."""
    return literal_column(f"{alias}.{column}")


class Join:
    """A table joined to the primary table under ``alias``.

    Subclasses set ``keyword``. Passing ``joins`` registers the join in that
    alias mapping (usually ``RowFields.joins``); duplicate aliases are rejected.
    """

    keyword: ClassVar[str]

    def __init__(
        self,
        joins: MutableMapping[str, Join] | None,
        to_table: str,
        alias: str,
        on_criteria: ColumnElement[Any] | str | None = None,
    ) -> None:
        if not is_valid_identifier(alias):
            raise SchemaError.invalid_identifier(alias, "join alias")
        self.table = to_table
        self.alias = alias
        self.on_criteria = on_criteria

        criteria = self.criteria_text
        self.referenced_joins: set[str] = (
            locate_join_aliases(criteria) - {alias, PRIMARY_TABLE_ALIAS} if criteria else set()
        )

        if joins is not None:
            if alias in joins:
                raise SchemaError.duplicate_join(alias, None)
            joins[alias] = self

    @property
    def criteria_text(self) -> str | None:
        if self.on_criteria is None:
            return None
        return str(self.on_criteria)

    def to_sql(self) -> str:
        sql = f"{self.keyword} {self.table} {self.alias}"
        criteria = self.criteria_text
        if criteria:
            sql += f" ON ({criteria})"
        return sql

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.table!r}, {self.alias!r})"


class LeftJoin(Join):
    keyword = "LEFT JOIN"


class InnerJoin(Join):
    keyword = "INNER JOIN"
