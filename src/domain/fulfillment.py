"""Partial Fulfillment Rules

Works out how much of a purchase order is still to be received, given every
purchase receive already recorded against it.

Lines are matched on (product_id, product_specification_id). Lines without a
specification share the ``(product_id, None)`` bucket.
"""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple
from pydantic import BaseModel

from src.domain.pricing import ZERO

FulfillmentKey = Tuple[int, Optional[int]]


class RemainingLine(BaseModel):
    """An order line with quantity still outstanding"""

    product_id: int
    product_specification_id: Optional[int] = None
    product_name: Optional[str] = None
    unit_id: Optional[int] = None
    unit_price: Decimal = ZERO
    ordered_quantity: Decimal
    received_quantity: Decimal
    quantity: Decimal


def fulfillment_key(line: Any) -> FulfillmentKey:
    return (line.product_id, line.product_specification_id or None)


def received_quantity_index(receipts: Iterable[Iterable[Any]]) -> Dict[FulfillmentKey, Decimal]:
    """
    Accumulate received quantities across receipt documents

    Args:
        receipts: One iterable of lines per receipt document. Lines need
            product_id, product_specification_id and quantity attributes.

    Returns:
        Quantity received so far per (product_id, specification_id)
    """
    received: Dict[FulfillmentKey, Decimal] = {}
    for receipt_lines in receipts:
        for line in receipt_lines:
            key = fulfillment_key(line)
            received[key] = received.get(key, ZERO) + (line.quantity or ZERO)
    return received


def resolve_remaining(
    order_lines: Iterable[Any],
    receipts: Iterable[Iterable[Any]],
) -> List[RemainingLine]:
    """
    Compute the outstanding quantity of each order line

    Fully received lines are left out. An empty list means the order has
    nothing left to receive.

    Args:
        order_lines: Lines of the purchase order, in display order
        receipts: Lines of every prior receipt referencing the order

    Returns:
        RemainingLine per order line with remaining quantity > 0
    """
    received = received_quantity_index(receipts)
    remaining_lines = []

    for line in order_lines:
        ordered = line.quantity or ZERO
        received_quantity = received.get(fulfillment_key(line), ZERO)
        remaining = ordered - received_quantity
        if remaining <= 0:
            continue

        remaining_lines.append(
            RemainingLine(
                product_id=line.product_id,
                product_specification_id=line.product_specification_id,
                product_name=getattr(line, "product_name", None),
                unit_id=getattr(line, "unit_id", None),
                unit_price=getattr(line, "unit_price", None) or ZERO,
                ordered_quantity=ordered,
                received_quantity=received_quantity,
                quantity=remaining,
            )
        )

    return remaining_lines
