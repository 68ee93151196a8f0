"""Unit tests for the pure validation layer."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from errors import ValidationError
from models import (
    CreateTransactionItemRequest,
    CreateTransactionRequest,
    TransactionFilter,
    TransactionType,
    UpdateTransactionRequest,
)
from services import validation


def _item(quantity=1, unit_price=10, tax_rate=0.1, product_id=1):
    return CreateTransactionItemRequest(
        product_id=product_id,
        quantity=quantity,
        unit_price=unit_price,
        tax_rate=tax_rate,
    )


def _request(items=None, transaction_type="sale"):
    return CreateTransactionRequest(
        customer_id=1,
        transaction_type=transaction_type,
        transaction_date=datetime(2024, 3, 1),
        items=[_item()] if items is None else items,
    )


# ---------------------------------------------------------------------------
# Scalar conversion
# ---------------------------------------------------------------------------


def test_to_decimal_converts_floats_through_their_string_form():
    assert validation.to_decimal(0.1, "x") == Decimal("0.1")


@pytest.mark.parametrize("value", ["12.50", 3, Decimal("7.25")])
def test_to_decimal_accepts_numeric_inputs(value):
    assert validation.to_decimal(value, "x") == Decimal(str(value))


@pytest.mark.parametrize("value", ["abc", None, True, float("nan"), float("inf"), "Infinity"])
def test_to_decimal_rejects_non_numbers(value):
    with pytest.raises(ValidationError):
        validation.to_decimal(value, "Item quantity")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("value", ["sale", "purchase", TransactionType.SALE])
def test_transaction_type_accepts_known_values(value):
    assert validation.validate_transaction_type(value) in {"sale", "purchase"}


def test_transaction_type_rejects_unknown_value():
    with pytest.raises(ValidationError, match="'sale' or 'purchase'"):
        validation.validate_transaction_type("refund")


def test_status_rejects_unknown_value():
    with pytest.raises(ValidationError, match="Status must be"):
        validation.validate_status("archived")


# ---------------------------------------------------------------------------
# Creation requests
# ---------------------------------------------------------------------------


def test_create_request_requires_items():
    with pytest.raises(ValidationError, match="at least one item"):
        validation.validate_create_request(_request(items=[]))


def test_create_request_checks_type_before_items():
    with pytest.raises(ValidationError, match="Transaction type"):
        validation.validate_create_request(_request(items=[], transaction_type="gift"))


@pytest.mark.parametrize(
    "item, message",
    [
        (_item(quantity=0), "quantity must be positive"),
        (_item(quantity=-1), "quantity must be positive"),
        (_item(unit_price=-0.01), "unit price cannot be negative"),
        (_item(tax_rate=-0.1), "between 0.0 and 1.0"),
        (_item(tax_rate=1.01), "between 0.0 and 1.0"),
    ],
)
def test_create_request_rejects_bad_items(item, message):
    with pytest.raises(ValidationError, match=message):
        validation.validate_create_request(_request(items=[_item(), item]))


def test_create_request_allows_boundary_values():
    request = validation.validate_create_request(
        _request(items=[_item(unit_price=0, tax_rate=0), _item(tax_rate=1)])
    )

    assert [item.tax_rate for item in request.items] == [Decimal("0"), Decimal("1")]
    assert request.items[0].unit_price == Decimal("0")


def test_create_request_normalizes_amounts_to_decimal():
    request = validation.validate_create_request(_request(items=[_item(quantity=2, unit_price=10.0)]))

    item = request.items[0]
    assert isinstance(item.quantity, Decimal)
    assert isinstance(item.unit_price, Decimal)
    assert isinstance(item.tax_rate, Decimal)
    assert request.transaction_type == "sale"


def test_create_request_requires_datetime():
    request = CreateTransactionRequest(
        customer_id=1,
        transaction_type="sale",
        transaction_date="yesterday",
        items=[_item()],
    )
    with pytest.raises(ValidationError, match="date"):
        validation.validate_create_request(request)


# ---------------------------------------------------------------------------
# Update requests and filters
# ---------------------------------------------------------------------------


def test_update_request_rejects_empty_patch():
    with pytest.raises(ValidationError, match="No fields to update"):
        validation.validate_update_request(UpdateTransactionRequest())


def test_update_request_checks_status_before_emptiness():
    with pytest.raises(ValidationError, match="Status must be"):
        validation.validate_update_request(UpdateTransactionRequest(status="void"))


def test_update_assignments_follow_fixed_column_order():
    request = UpdateTransactionRequest(
        notes="n",
        status="confirmed",
        transaction_date=datetime(2024, 1, 1),
        customer_id=3,
    )

    assert [name for name, _ in request.assignments()] == [
        "customer_id",
        "transaction_date",
        "status",
        "notes",
    ]


def test_update_assignments_skip_unset_fields():
    assert UpdateTransactionRequest(notes="only notes").assignments() == [("notes", "only notes")]


@pytest.mark.parametrize("filters", [TransactionFilter(limit=-1), TransactionFilter(limit=5, offset=-2)])
def test_filter_rejects_negative_pagination(filters):
    with pytest.raises(ValidationError):
        validation.validate_filter(filters)


def test_filter_rejects_unknown_type():
    with pytest.raises(ValidationError):
        validation.validate_filter(TransactionFilter(transaction_type="rent"))


# ---------------------------------------------------------------------------
# Storage precision and range
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "item, message",
    [
        (_item(quantity="1.00005", unit_price=3), "Item quantity cannot have more than 4 decimal places"),
        (_item(unit_price="19.99995"), "Item unit price cannot have more than 4 decimal places"),
        (_item(tax_rate="0.0887501"), "Tax rate cannot have more than 6 decimal places"),
    ],
)
def test_item_values_finer_than_column_scale_are_rejected(item, message):
    with pytest.raises(ValidationError) as excinfo:
        validation.validate_item(item)

    assert excinfo.value.message == message


def test_item_values_are_returned_at_column_scale():
    item = validation.validate_item(_item(quantity="1.5000000", unit_price="2", tax_rate="0.08875"))

    assert item.quantity == Decimal("1.5")
    assert item.quantity.as_tuple().exponent == -4
    assert item.unit_price.as_tuple().exponent == -4
    assert item.tax_rate == Decimal("0.08875")
    assert item.tax_rate.as_tuple().exponent == -6


@pytest.mark.parametrize(
    "item",
    [
        _item(quantity="1e20", unit_price="1e10", tax_rate="0"),
        _item(unit_price="123456789012345.6789"),
        _item(quantity="100000000000"),
        _item(quantity="1e30"),
    ],
)
def test_item_values_beyond_storable_range_are_rejected(item):
    with pytest.raises(ValidationError):
        validation.validate_item(item)


def test_largest_storable_unit_price_is_accepted():
    item = validation.validate_item(_item(unit_price="99999999999.9999"))

    assert item.unit_price == Decimal("99999999999.9999")
