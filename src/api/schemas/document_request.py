"""Request schemas for Document API

Pydantic models for validating incoming HTTP requests. Field names follow the
ones the mobile forms send (supplier_id / customer_id, order_date /
receive_date, purchase_order_id).
"""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.documents.dtos import (
    CreateDocumentCommandDTO,
    FulfillmentLineInput,
    LineItemInput,
    PreviewLineInput,
    PreviewTotalsCommandDTO,
    RemainingQuantitiesCommandDTO,
    UpdateDocumentCommandDTO,
)
from src.domain.document import DocumentType
from src.domain.pricing import ZERO
from .decoders import extract_lines, unwrap_collection, unwrap_record


class LineItemRequestSchema(BaseModel):
    """One document line"""

    product_id: int = Field(..., description="Product reference")
    product_specification_id: Optional[int] = Field(default=None, description="Product specification")
    product_name: Optional[str] = Field(default=None, max_length=255, description="Product name")
    unit_id: Optional[int] = Field(default=None, description="Unit of measure")
    quantity: Optional[Decimal] = Field(default=None, description="Quantity (must be > 0)")
    unit_price: Optional[Decimal] = Field(default=None, description="Price per unit (must be >= 0)")
    discount_percentage: Optional[Decimal] = Field(default=None, description="Discount percentage (0-100)")
    tax_percentage: Optional[Decimal] = Field(default=None, description="Tax percentage (0-100)")

    @field_validator("quantity", "unit_price", "discount_percentage", "tax_percentage", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        """An empty text field is a missing value, not a parse error"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_input(self) -> LineItemInput:
        return LineItemInput(
            product_id=self.product_id,
            product_specification_id=self.product_specification_id,
            product_name=self.product_name,
            unit_id=self.unit_id,
            quantity=self.quantity,
            unit_price=self.unit_price,
            discount_percentage=self.discount_percentage if self.discount_percentage is not None else ZERO,
            tax_percentage=self.tax_percentage if self.tax_percentage is not None else ZERO,
        )


class DocumentRequestSchema(BaseModel):
    """Header fields and lines shared by create and update"""

    supplier_id: Optional[int] = Field(default=None, description="Supplier (purchase documents)")
    customer_id: Optional[int] = Field(default=None, description="Customer (sales orders)")
    warehouse_id: Optional[int] = Field(default=None, description="Receiving warehouse")
    order_date: Optional[date] = Field(default=None, description="Order date")
    receive_date: Optional[date] = Field(default=None, description="Receive date (purchase receives)")
    expected_delivery_date: Optional[date] = Field(default=None, description="Expected delivery date")
    purchase_order_id: Optional[int] = Field(default=None, description="Purchase order being received")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    status: str = Field(default="draft", min_length=1, max_length=32, description="Document status")
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3, description="Currency code")
    items: List[LineItemRequestSchema] = Field(default_factory=list, description="Document lines")

    @field_validator("order_date", "receive_date", "expected_delivery_date", mode="before")
    @classmethod
    def date_part(cls, v):
        """Accept ISO datetimes (2024-03-01T00:00:00.000Z) by keeping the date part"""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            if "T" in v:
                return v.split("T", 1)[0]
        return v

    def _header_fields(self, document_type: Optional[DocumentType]) -> dict:
        if document_type is DocumentType.SALES_ORDER:
            party_id = self.customer_id
        elif document_type is None:
            party_id = self.supplier_id if self.supplier_id is not None else self.customer_id
        else:
            party_id = self.supplier_id

        if document_type is DocumentType.PURCHASE_RECEIVE:
            document_date = self.receive_date
        elif document_type is None:
            document_date = self.receive_date or self.order_date
        else:
            document_date = self.order_date

        return dict(
            party_id=party_id,
            warehouse_id=self.warehouse_id,
            document_date=document_date,
            expected_date=self.expected_delivery_date,
            parent_order_id=self.purchase_order_id,
            notes=self.notes,
            status=self.status,
            currency=self.currency,
            items=[item.to_input() for item in self.items],
        )


class CreateDocumentRequestSchema(DocumentRequestSchema):
    """
    Request schema for creating a document

    Used for POST /documents endpoint.
    """

    document_type: DocumentType = Field(..., description="purchase_order, purchase_receive or sales_order")
    code: Optional[str] = Field(default=None, max_length=50, description="Document code (generated when empty)")

    def to_command(self) -> CreateDocumentCommandDTO:
        return CreateDocumentCommandDTO(
            document_type=self.document_type,
            code=self.code or None,
            **self._header_fields(self.document_type),
        )

    class Config:
        json_schema_extra = {
            "example": {
                "document_type": "purchase_receive",
                "supplier_id": 12,
                "warehouse_id": 3,
                "receive_date": "2024-03-10",
                "purchase_order_id": 1,
                "items": [
                    {
                        "product_id": 7,
                        "product_specification_id": 31,
                        "product_name": "Steel pipe 40mm",
                        "quantity": "35",
                        "unit_price": "1000"
                    }
                ]
            }
        }


class UpdateDocumentRequestSchema(DocumentRequestSchema):
    """
    Request schema for updating a document

    Used for PUT /documents/{document_id}. The stored document type decides
    which party and date are required.
    """

    def to_command(self) -> UpdateDocumentCommandDTO:
        return UpdateDocumentCommandDTO(**self._header_fields(None))


class PreviewTotalsRequestSchema(BaseModel):
    """Form lines exactly as typed"""

    items: List[PreviewLineInput] = Field(default_factory=list)

    def to_command(self) -> PreviewTotalsCommandDTO:
        return PreviewTotalsCommandDTO(items=self.items)


class RemainingQuantitiesRequestSchema(BaseModel):
    """
    Purchase order and prior receipts as fetched from the REST backend

    ``order`` is an order record (lines under items or
    purchase_order_items), possibly wrapped in ``data``, or a bare list of
    lines. ``receipts`` is a collection of receipt records in any envelope.
    """

    order: Any = Field(..., description="Purchase order record or its lines")
    receipts: Any = Field(default=None, description="Prior receipt records")

    def to_command(self) -> RemainingQuantitiesCommandDTO:
        """
        Decode the records into typed lines

        Raises:
            ValueError: when a record or line cannot be decoded
        """
        order_id = None
        if not isinstance(self.order, list):
            order_id = unwrap_record(self.order).get("id")

        return RemainingQuantitiesCommandDTO(
            purchase_order_id=order_id,
            order_lines=[
                FulfillmentLineInput.model_validate(line) for line in extract_lines(self.order)
            ],
            receipts=[
                [FulfillmentLineInput.model_validate(line) for line in extract_lines(receipt)]
                for receipt in unwrap_collection(self.receipts)
            ],
        )
