"""Line Pricing Rules

Pure calculations shared by purchase orders, purchase receives and sales
orders: the amounts of a single line and the aggregate totals of a document.

Amounts are computed with Decimal and are not rounded here. Persistence
quantizes them to the storage scale with ``to_amount``.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable
from pydantic import BaseModel

ZERO = Decimal("0")
HUNDRED = Decimal("100")
AMOUNT_QUANTUM = Decimal("0.000001")
# Largest power of ten accepted by coerce_decimal; products of four such
# factors stay far inside the default context exponent range.
MAX_EXPONENT = 20


def coerce_decimal(value: Any) -> Decimal:
    """
    Permissive number parsing for live recalculation

    Empty, missing or non-numeric input counts as zero so totals can be shown
    while the user is still typing. So do infinities and magnitudes above
    10**MAX_EXPONENT. Submission validates separately.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return _bounded(value)
    if isinstance(value, (int, float)):
        value = str(value)
    text = str(value).strip().replace(",", "")
    if not text:
        return ZERO
    try:
        number = Decimal(text)
    except InvalidOperation:
        return ZERO
    return _bounded(number)


def _bounded(number: Decimal) -> Decimal:
    if not number.is_finite() or number.adjusted() > MAX_EXPONENT:
        return ZERO
    return number


def to_amount(value: Decimal) -> Decimal:
    """Quantize an amount to the Numeric(18, 6) storage scale"""
    return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)


class LineAmounts(BaseModel):
    """Derived amounts of one line"""

    subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total: Decimal


class DocumentTotals(BaseModel):
    """Aggregate amounts of a document"""

    total_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    tax_amount: Decimal = ZERO
    final_amount: Decimal = ZERO


def compute_line_total(
    quantity: Decimal,
    unit_price: Decimal,
    discount_percentage: Decimal = ZERO,
    tax_percentage: Decimal = ZERO,
) -> LineAmounts:
    """
    Compute the amounts of a line

    Discount applies to the subtotal; tax applies to the discounted amount.
    Percentages are not clamped.

    Args:
        quantity: Line quantity
        unit_price: Price per unit
        discount_percentage: Discount in percent of the subtotal
        tax_percentage: Tax in percent of the discounted amount

    Returns:
        LineAmounts with subtotal, discount, taxable amount, tax and total
    """
    subtotal = quantity * unit_price
    discount_amount = subtotal * discount_percentage / HUNDRED
    taxable_amount = subtotal - discount_amount
    tax_amount = taxable_amount * tax_percentage / HUNDRED
    return LineAmounts(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total=taxable_amount + tax_amount,
    )


def aggregate(lines: Iterable[LineAmounts]) -> DocumentTotals:
    """
    Sum line amounts into document totals

    final_amount always equals the sum of the line totals.
    """
    total_amount = ZERO
    discount_amount = ZERO
    tax_amount = ZERO

    for line in lines:
        total_amount += line.subtotal
        discount_amount += line.discount_amount
        tax_amount += line.tax_amount

    return DocumentTotals(
        total_amount=total_amount,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        final_amount=total_amount - discount_amount + tax_amount,
    )
