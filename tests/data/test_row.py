"""Tests for declarative Row types."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest

from rowfields.core.errors import DeserializationError, ErrorCode, SchemaError
from rowfields.data import (
    DecimalField,
    FieldFlags,
    Int32Field,
    LeftJoin,
    Row,
    StringField,
)


class CustomerRow(Row):
    customer_id = Int32Field("CustomerId", flags=FieldFlags.IDENTITY)
    name = StringField("Name", size=100)


class OrderRow(Row):
    table_name = "Orders"
    local_text_prefix = "Sales.Order"

    order_id = Int32Field("OrderId", flags=FieldFlags.IDENTITY)
    customer_id = Int32Field("CustomerId", foreign_table="Customers")
    customer_name = StringField(
        "CustomerName", property_name="Customer", expression="jCustomer.Name"
    )
    total = DecimalField("Total", scale=2, default_value=Decimal("0"))

    joins = (customer_id.foreign_join(),)


class TestDeclaration:
    """Class-level schema construction."""

    def test_given_subclass_then_schema_built_in_declaration_order(self) -> None:
        fields = OrderRow.fields
        assert [f.name for f in fields] == ["OrderId", "CustomerId", "CustomerName", "Total"]
        assert [f.attr_name for f in fields] == ["order_id", "customer_id", "customer_name", "total"]
        assert fields.is_initialized
        assert fields.row_type is OrderRow
        assert all(f.row_type is OrderRow for f in fields)

    def test_given_no_table_name_then_class_name_without_suffix(self) -> None:
        assert CustomerRow.fields.table_name == "Customer"
        assert CustomerRow.fields.local_text_prefix == "Customer"

    def test_given_explicit_names_then_used(self) -> None:
        assert OrderRow.fields.table_name == "Orders"
        assert OrderRow.fields.local_text_prefix == "Sales.Order"

    def test_given_joins_tuple_then_registered_and_resolved(self) -> None:
        """Declared joins back the field's join lookup."""
        join = OrderRow.fields.joins["jCustomer"]
        assert isinstance(join, LeftJoin)
        assert OrderRow.customer_name.join is join
        assert OrderRow.customer_name.origin == "Name"

    def test_given_subclass_without_fields_then_parent_schema_reused(self) -> None:
        class SpecialOrderRow(OrderRow):
            pass

        assert SpecialOrderRow.fields is OrderRow.fields

    def test_given_subclass_of_concrete_row_when_declaring_fields_then_rejected(self) -> None:
        """Extending a published schema would silently drop the parent's fields."""
        with pytest.raises(SchemaError) as exc_info:

            class ExtendedOrderRow(OrderRow):
                note = StringField("Note")

        assert exc_info.value.code == ErrorCode.SCHEMA_INITIALIZED
        assert exc_info.value.details["table"] == "Orders"
        assert len(OrderRow.fields) == 4

    def test_given_abstract_base_then_subclass_builds_schema(self) -> None:
        """A base without fields does not block subclasses from declaring them."""

        class AuditedRow(Row):
            local_text_prefix = "Audit"

        class NoteRow(AuditedRow):
            note_id = Int32Field("NoteId")

        assert [f.name for f in NoteRow.fields] == ["NoteId"]
        assert NoteRow.fields.local_text_prefix == "Audit"

    def test_given_bare_row_when_instantiated_then_type_error(self) -> None:
        with pytest.raises(TypeError):
            Row()

    def test_given_each_class_then_separate_schemas(self) -> None:
        assert CustomerRow.fields is not OrderRow.fields
        assert CustomerRow.customer_id.fields is CustomerRow.fields
        assert OrderRow.customer_id.fields is OrderRow.fields


class TestValues:
    def test_given_kwargs_then_values_set(self) -> None:
        row = OrderRow(order_id=1, customer_name="Acme")
        assert row.order_id == 1
        assert row.customer_name == "Acme"
        assert row.total == Decimal("0")
        assert row.customer_id is None

    def test_given_unknown_kwarg_then_schema_error(self) -> None:
        with pytest.raises(SchemaError) as exc_info:
            OrderRow(nope=1)
        assert exc_info.value.code == ErrorCode.SCHEMA_UNKNOWN_FIELD

    def test_given_field_of_other_schema_then_rejected(self) -> None:
        row = OrderRow()
        with pytest.raises(SchemaError):
            CustomerRow.name.get_value(row)

    def test_given_tracking_then_assignments_recorded(self) -> None:
        """Only explicit sets are assignments; defaults are not."""
        # Given
        row = OrderRow(track_assignments=True)

        # When
        row.customer_id = 7

        # Then
        assert row.assigned_fields() == [OrderRow.customer_id]
        assert not row.is_assigned(OrderRow.total)

    def test_given_no_tracking_then_nothing_assigned(self) -> None:
        row = OrderRow(customer_id=7)
        assert row.assigned_fields() == []

    def test_given_assignment_when_cleared_then_value_kept(self) -> None:
        row = OrderRow(track_assignments=True)
        row.customer_id = 7

        row.clear_assignment(OrderRow.customer_id)

        assert not row.is_assigned(OrderRow.customer_id)
        assert row.customer_id == 7

    def test_clone_copies_values_and_assignments(self) -> None:
        row = OrderRow(track_assignments=True)
        row.customer_id = 7

        clone = row.clone()

        assert clone == row
        assert clone is not row
        assert clone.is_assigned(OrderRow.customer_id)
        clone.customer_id = 8
        assert row.customer_id == 7

    def test_equality_compares_values(self) -> None:
        assert OrderRow(order_id=1) == OrderRow(order_id=1)
        assert OrderRow(order_id=1) != OrderRow(order_id=2)
        assert OrderRow(order_id=1) != CustomerRow(customer_id=1)

    def test_repr_lists_attribute_values(self) -> None:
        assert repr(CustomerRow(customer_id=3, name="Acme")) == (
            "CustomerRow(customer_id=3, name='Acme')"
        )


class TestJsonRoundTrip:
    """to_dict / from_dict / to_json / from_json."""

    def test_to_dict_keys_by_property_name(self) -> None:
        row = OrderRow(order_id=1, customer_id=2, customer_name="Acme", total=Decimal("9.5"))
        assert row.to_dict() == {
            "OrderId": 1,
            "CustomerId": 2,
            "Customer": "Acme",
            "Total": 9.5,
        }

    def test_to_dict_assigned_only(self) -> None:
        row = OrderRow(track_assignments=True)
        row.customer_id = 2
        assert row.to_dict(assigned_only=True) == {"CustomerId": 2}

    def test_from_dict_marks_present_keys_assigned(self) -> None:
        row = OrderRow.from_dict({"CustomerId": 2, "Customer": "Acme"})

        assert row.customer_id == 2
        assert row.customer_name == "Acme"
        assert {f.name for f in row.assigned_fields()} == {"CustomerId", "CustomerName"}

    def test_from_dict_accepts_field_name(self) -> None:
        row = OrderRow.from_dict({"customername": "Acme"})
        assert row.customer_name == "Acme"

    def test_from_dict_unknown_key_raises(self) -> None:
        with pytest.raises(DeserializationError) as exc_info:
            OrderRow.from_dict({"Nope": 1})
        assert exc_info.value.code == ErrorCode.VALUE_UNKNOWN_PROPERTY

    def test_from_dict_wrong_token_raises(self) -> None:
        with pytest.raises(DeserializationError) as exc_info:
            OrderRow.from_dict({"CustomerId": [1]})
        assert exc_info.value.code == ErrorCode.VALUE_UNEXPECTED_TOKEN

    def test_json_text_round_trip(self) -> None:
        row = OrderRow(order_id=1, customer_id=2, customer_name="Acme", total=Decimal("9.5"))

        text = row.to_json()
        restored = OrderRow.from_json(text)

        assert json.loads(text)["Customer"] == "Acme"
        assert restored == row

    def test_from_json_rejects_non_object(self) -> None:
        with pytest.raises(DeserializationError) as exc_info:
            OrderRow.from_json("[1, 2]")
        assert exc_info.value.details["token"] == "StartArray"
