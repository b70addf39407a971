"""Draft Document Assembly

Validates a document header and its lines and combines them with the
computed totals into a payload ready to persist.

Checks run in a fixed order and stop at the first failure:
1. party (supplier or customer) present
2. document date present
3. warehouse present for purchase receives
4. at least one line
5. per line: quantity > 0 and at least AMOUNT_QUANTUM, unit price >= 0,
   discount and tax in [0, 100], quantity and unit price within MAX_LINE_VALUE
"""

from decimal import Decimal
from typing import List, Optional
from libs.result import Result, Return, Error
from src.domain.document import DocumentType
from src.domain.pricing import AMOUNT_QUANTUM, HUNDRED, ZERO, aggregate, compute_line_total
from .dtos import DocumentHeaderDTO, DocumentPayload, LineItemInput, PayloadLineDTO

MAX_LINE_VALUE = Decimal("999999999")

VALIDATION_ERROR_CODES = frozenset({
    "PARTY_REQUIRED",
    "DATE_REQUIRED",
    "WAREHOUSE_REQUIRED",
    "ITEMS_REQUIRED",
    "INVALID_QUANTITY",
    "INVALID_UNIT_PRICE",
    "INVALID_DISCOUNT",
    "INVALID_TAX",
    "VALUE_TOO_LARGE",
})

_PARTY_LABELS = {
    DocumentType.PURCHASE_ORDER: "supplier",
    DocumentType.PURCHASE_RECEIVE: "supplier",
    DocumentType.SALES_ORDER: "customer",
}


def _invalid(code: str, message: str, **details) -> Result[DocumentPayload]:
    return Return.err(
        Error(
            code=code,
            message=message,
            reason="Document validation failed",
            details=details,
        )
    )


def item_label(position: int, item: LineItemInput) -> str:
    return item.product_name or f"Item {position}"


def _validate_item(position: int, item: LineItemInput) -> Optional[Result[DocumentPayload]]:
    label = item_label(position, item)
    context = {"item_index": position, "item_label": label}

    if item.quantity is None or item.quantity <= 0:
        return _invalid(
            "INVALID_QUANTITY",
            f"Item {position}: quantity of \"{label}\" must be greater than 0",
            field="quantity",
            **context,
        )

    if item.quantity < AMOUNT_QUANTUM:
        return _invalid(
            "INVALID_QUANTITY",
            f"Item {position}: quantity of \"{label}\" must be at least {AMOUNT_QUANTUM}",
            field="quantity",
            **context,
        )

    if item.unit_price is None or item.unit_price < 0:
        return _invalid(
            "INVALID_UNIT_PRICE",
            f"Item {position}: unit price of \"{label}\" must be 0 or more",
            field="unit_price",
            **context,
        )

    discount = item.discount_percentage if item.discount_percentage is not None else ZERO
    if discount < 0 or discount > HUNDRED:
        return _invalid(
            "INVALID_DISCOUNT",
            f"Item {position}: discount of \"{label}\" must be between 0% and 100%",
            field="discount_percentage",
            **context,
        )

    tax = item.tax_percentage if item.tax_percentage is not None else ZERO
    if tax < 0 or tax > HUNDRED:
        return _invalid(
            "INVALID_TAX",
            f"Item {position}: tax of \"{label}\" must be between 0% and 100%",
            field="tax_percentage",
            **context,
        )

    for field in ("quantity", "unit_price"):
        if getattr(item, field) > MAX_LINE_VALUE:
            return _invalid(
                "VALUE_TOO_LARGE",
                f"Item {position}: {field.replace('_', ' ')} of \"{label}\" "
                f"must not exceed {MAX_LINE_VALUE:,}",
                field=field,
                **context,
            )

    return None


def assemble_document(
    document_type: DocumentType,
    header: DocumentHeaderDTO,
    items: Optional[List[LineItemInput]] = None,
) -> Result[DocumentPayload]:
    """
    Validate a document and compute its totals

    Args:
        document_type: Type of the document being saved
        header: Header fields
        items: Lines in display order (defaults to header.items)

    Returns:
        Result[DocumentPayload]: Payload with totals and line amounts, or the
        first validation error
    """
    if items is None:
        items = header.items

    if header.party_id is None:
        party = _PARTY_LABELS[document_type]
        return _invalid(
            "PARTY_REQUIRED",
            f"Please select a {party}; the {party} is required",
            field=document_type.party_field,
        )

    if header.document_date is None:
        return _invalid(
            "DATE_REQUIRED",
            "Please select the document date; it is required",
            field=document_type.date_field,
        )

    if document_type is DocumentType.PURCHASE_RECEIVE and header.warehouse_id is None:
        return _invalid(
            "WAREHOUSE_REQUIRED",
            "Please select the receiving warehouse",
            field="warehouse_id",
        )

    if not items:
        return _invalid(
            "ITEMS_REQUIRED",
            "Please add at least one product to the document",
            field="items",
        )

    for position, item in enumerate(items, start=1):
        error = _validate_item(position, item)
        if error is not None:
            return error

    payload_lines = []
    line_amounts = []
    for position, item in enumerate(items, start=1):
        discount = item.discount_percentage if item.discount_percentage is not None else ZERO
        tax = item.tax_percentage if item.tax_percentage is not None else ZERO
        amounts = compute_line_total(item.quantity, item.unit_price, discount, tax)
        line_amounts.append(amounts)
        payload_lines.append(
            PayloadLineDTO(
                **item.model_dump(exclude={"discount_percentage", "tax_percentage"}),
                discount_percentage=discount,
                tax_percentage=tax,
                position=position,
                subtotal=amounts.subtotal,
                discount_amount=amounts.discount_amount,
                tax_amount=amounts.tax_amount,
                total_amount=amounts.total,
            )
        )

    totals = aggregate(line_amounts)

    return Return.ok(
        DocumentPayload(
            document_type=document_type,
            party_id=header.party_id,
            warehouse_id=header.warehouse_id,
            document_date=header.document_date,
            expected_date=header.expected_date,
            parent_order_id=header.parent_order_id,
            notes=header.notes,
            status=header.status,
            currency=header.currency,
            total_amount=totals.total_amount,
            discount_amount=totals.discount_amount,
            tax_amount=totals.tax_amount,
            final_amount=totals.final_amount,
            lines=payload_lines,
        )
    )
