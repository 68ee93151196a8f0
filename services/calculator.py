"""
Line-item arithmetic.
All amounts are Decimal and every derived value is quantized to MONEY_QUANT,
so totals are exact sums of the stored item values.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, Tuple

from errors import ValidationError
from models import LineAmounts

# Matches the scale of the Numeric(18, 4) amount columns
MONEY_QUANT = Decimal("0.0001")
# Matches the scale of the Numeric(18, 6) tax_rate columns
RATE_QUANT = Decimal("0.000001")
# SQLite keeps Numeric as REAL: 11 integer digits plus 4 decimals is the
# widest value that reads back exactly
MAX_AMOUNT = Decimal("1E11")
ZERO = Decimal("0")

# Wide enough that products of in-range values are never rounded by the context
_CALC_PRECISION = 50


def check_amount(value: Decimal, field_name: str) -> Decimal:
    """
    Ensure a value fits the amount columns.

    Raises:
        ValidationError: if abs(value) >= MAX_AMOUNT
    """
    if abs(value) >= MAX_AMOUNT:
        raise ValidationError(f"{field_name} is out of range (must be below {MAX_AMOUNT:,.0f})")
    return value


def quantize_money(value) -> Decimal:
    """Round a monetary value to the storage scale."""
    if isinstance(value, float):
        value = Decimal(str(value))
    with localcontext() as ctx:
        ctx.prec = _CALC_PRECISION
        return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


def calculate_line(quantity: Decimal, unit_price: Decimal, tax_rate: Decimal) -> LineAmounts:
    """
    Derive subtotal, tax and total for one item.

    subtotal = quantity * unit_price
    tax_amount = subtotal * tax_rate
    total_amount = subtotal + tax_amount

    Inputs are expected at storage scale (see services.validation).

    Raises:
        ValidationError: if a derived amount does not fit the amount columns

    Examples:
        >>> calculate_line(Decimal("2"), Decimal("10.0"), Decimal("0.1")).total_amount
        Decimal('22.0000')
    """
    with localcontext() as ctx:
        ctx.prec = _CALC_PRECISION
        subtotal = check_amount(quantize_money(quantity * unit_price), "Item subtotal")
        tax_amount = check_amount(quantize_money(subtotal * tax_rate), "Item tax amount")
        total_amount = check_amount(subtotal + tax_amount, "Item total amount")
    return LineAmounts(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount
    )


def calculate_totals(lines: Iterable[LineAmounts]) -> Tuple[Decimal, Decimal]:
    """
    Sum item amounts into transaction totals.

    Returns:
        Tuple of (total_amount, tax_amount)

    Raises:
        ValidationError: if a total does not fit the amount columns
    """
    total_amount = ZERO
    tax_amount = ZERO
    with localcontext() as ctx:
        ctx.prec = _CALC_PRECISION
        for line in lines:
            total_amount += line.total_amount
            tax_amount += line.tax_amount
    return (
        check_amount(quantize_money(total_amount), "Transaction total amount"),
        check_amount(quantize_money(tax_amount), "Transaction tax amount"),
    )
