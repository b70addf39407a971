"""Conversions between document entities, payloads and DTOs"""

from typing import List
from src.domain.document import Document, DocumentType
from src.domain.document_line import DocumentLine
from src.domain.pricing import to_amount
from .dtos import DocumentLineDTO, DocumentPayload, DocumentResponseDTO, DocumentSummaryDTO


def apply_payload(document: Document, payload: DocumentPayload) -> Document:
    """Copy validated header fields and totals onto a document entity"""
    document.party_id = payload.party_id
    document.warehouse_id = payload.warehouse_id
    document.document_date = payload.document_date
    document.expected_date = payload.expected_date
    document.parent_order_id = payload.parent_order_id
    document.notes = payload.notes
    document.status = payload.status
    if payload.currency:
        document.currency = payload.currency
    document.total_amount = to_amount(payload.total_amount)
    document.discount_amount = to_amount(payload.discount_amount)
    document.tax_amount = to_amount(payload.tax_amount)
    document.final_amount = to_amount(payload.final_amount)
    return document


def build_lines(document_id: int, payload: DocumentPayload) -> List[DocumentLine]:
    return [
        DocumentLine(
            document_id=document_id,
            position=line.position,
            product_id=line.product_id,
            product_specification_id=line.product_specification_id,
            product_name=line.product_name,
            unit_id=line.unit_id,
            quantity=to_amount(line.quantity),
            unit_price=to_amount(line.unit_price),
            discount_percentage=to_amount(line.discount_percentage),
            tax_percentage=to_amount(line.tax_percentage),
            subtotal=to_amount(line.subtotal),
            discount_amount=to_amount(line.discount_amount),
            tax_amount=to_amount(line.tax_amount),
            total_amount=to_amount(line.total_amount),
        )
        for line in payload.lines
    ]


def _summary_fields(document: Document) -> dict:
    is_sale = document.document_type == DocumentType.SALES_ORDER
    return dict(
        id=document.id,
        document_type=DocumentType(document.document_type).value,
        code=document.code,
        party_id=document.party_id,
        supplier_id=None if is_sale else document.party_id,
        customer_id=document.party_id if is_sale else None,
        warehouse_id=document.warehouse_id,
        parent_order_id=document.parent_order_id,
        document_date=document.document_date,
        expected_date=document.expected_date,
        status=document.status,
        currency=document.currency,
        notes=document.notes,
        total_amount=document.total_amount,
        discount_amount=document.discount_amount,
        tax_amount=document.tax_amount,
        final_amount=document.final_amount,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def to_summary_dto(document: Document) -> DocumentSummaryDTO:
    return DocumentSummaryDTO(**_summary_fields(document))


def to_line_dto(line: DocumentLine) -> DocumentLineDTO:
    return DocumentLineDTO(
        id=line.id,
        position=line.position,
        product_id=line.product_id,
        product_specification_id=line.product_specification_id,
        product_name=line.product_name,
        unit_id=line.unit_id,
        quantity=line.quantity,
        unit_price=line.unit_price,
        discount_percentage=line.discount_percentage,
        tax_percentage=line.tax_percentage,
        subtotal=line.subtotal,
        discount_amount=line.discount_amount,
        tax_amount=line.tax_amount,
        total_amount=line.total_amount,
    )


def to_response_dto(document: Document, lines: List[DocumentLine]) -> DocumentResponseDTO:
    return DocumentResponseDTO(
        **_summary_fields(document),
        items=[to_line_dto(line) for line in sorted(lines, key=lambda line: line.position)],
    )
