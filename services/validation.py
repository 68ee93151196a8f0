"""
Field-level and cross-field checks on inbound transaction requests.
Pure functions: no I/O, and the same input always gives the same answer.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List

from errors import ValidationError
from services.calculator import MONEY_QUANT, RATE_QUANT, check_amount
from models import (
    CreateTransactionItemRequest,
    CreateTransactionRequest,
    TransactionFilter,
    TransactionStatus,
    TransactionType,
    UpdateTransactionRequest,
)

logger = logging.getLogger(__name__)

MIN_TAX_RATE = Decimal("0")
MAX_TAX_RATE = Decimal("1")


def to_decimal(value: Any, field_name: str) -> Decimal:
    """
    Convert a numeric input to Decimal.
    Floats go through str() so 0.1 becomes Decimal('0.1'), not its binary expansion.

    Raises:
        ValidationError: if the value is not a finite number
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValidationError(f"{field_name} must be a finite number")
            result = Decimal(str(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    return result


def validate_transaction_type(transaction_type: Any) -> str:
    """Return the canonical transaction type value, or raise ValidationError."""
    try:
        return TransactionType(transaction_type).value
    except ValueError:
        raise ValidationError("Transaction type must be 'sale' or 'purchase'")


def validate_status(status: Any) -> str:
    """Return the canonical status value, or raise ValidationError."""
    try:
        return TransactionStatus(status).value
    except ValueError:
        raise ValidationError("Status must be 'draft', 'confirmed', or 'cancelled'")


def validate_item(item: CreateTransactionItemRequest) -> CreateTransactionItemRequest:
    """
    Check one line item and return it with Decimal amounts.

    Rules:
        quantity > 0, unit_price >= 0, 0 <= tax_rate <= 1
        quantity and unit_price below MAX_AMOUNT with at most 4 decimal places
        tax_rate with at most 6 decimal places
    """
    quantity = to_decimal(item.quantity, "Item quantity")
    unit_price = to_decimal(item.unit_price, "Item unit price")
    tax_rate = to_decimal(item.tax_rate, "Tax rate")

    if quantity <= 0:
        raise ValidationError("Item quantity must be positive")
    if unit_price < 0:
        raise ValidationError("Item unit price cannot be negative")
    if tax_rate < MIN_TAX_RATE or tax_rate > MAX_TAX_RATE:
        raise ValidationError("Tax rate must be between 0.0 and 1.0")

    check_amount(quantity, "Item quantity")
    check_amount(unit_price, "Item unit price")

    return replace(
        item,
        quantity=_at_scale(quantity, MONEY_QUANT, "Item quantity"),
        unit_price=_at_scale(unit_price, MONEY_QUANT, "Item unit price"),
        tax_rate=_at_scale(tax_rate, RATE_QUANT, "Tax rate"),
    )


def _at_scale(value: Decimal, quant: Decimal, field_name: str) -> Decimal:
    """
    Return value expressed at the column scale.
    Values with more significant decimal places than the column keeps are rejected,
    so what gets stored is exactly what the amounts were derived from.
    """
    scaled = value.quantize(quant)
    if scaled != value:
        places = -quant.as_tuple().exponent
        raise ValidationError(f"{field_name} cannot have more than {places} decimal places")
    return scaled


def validate_create_request(request: CreateTransactionRequest) -> CreateTransactionRequest:
    """
    Validate a creation request.

    Args:
        request: Incoming CreateTransactionRequest

    Returns:
        The request with canonical type value and Decimal item amounts

    Raises:
        ValidationError: naming the first violated rule
    """
    transaction_type = validate_transaction_type(request.transaction_type)

    if not isinstance(request.transaction_date, datetime):
        raise ValidationError("Transaction date is required")

    if not request.items:
        raise ValidationError("Transaction must have at least one item")

    items: List[CreateTransactionItemRequest] = [validate_item(item) for item in request.items]
    return replace(request, transaction_type=transaction_type, items=items)


def validate_update_request(request: UpdateTransactionRequest) -> UpdateTransactionRequest:
    """
    Validate a partial update: status value when supplied, and at least one field.

    Returns:
        The request with a canonical status value
    """
    if request.status is not None:
        request = replace(request, status=validate_status(request.status))

    if request.transaction_date is not None and not isinstance(request.transaction_date, datetime):
        raise ValidationError("Transaction date must be a datetime")

    if request.is_empty:
        raise ValidationError("No fields to update")

    return request


def validate_filter(filters: TransactionFilter) -> TransactionFilter:
    """Validate list filters and pagination."""
    if filters.transaction_type is not None:
        filters = replace(filters, transaction_type=validate_transaction_type(filters.transaction_type))
    if filters.limit is not None and filters.limit < 0:
        raise ValidationError("Limit cannot be negative")
    if filters.offset is not None and filters.offset < 0:
        raise ValidationError("Offset cannot be negative")
    return filters
