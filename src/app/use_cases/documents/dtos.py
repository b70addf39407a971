"""Data Transfer Objects for Document Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.document import DocumentType
from src.domain.fulfillment import RemainingLine
from src.domain.pricing import ZERO, coerce_decimal


class LineItemInput(BaseModel):
    """
    One line as entered in a document form

    quantity and unit_price stay optional so that a missing value is reported
    by document validation rather than by parsing.
    """

    product_id: int = Field(..., description="Product reference")
    product_specification_id: Optional[int] = Field(default=None, description="Product specification")
    product_name: Optional[str] = Field(default=None, description="Product name used in messages")
    unit_id: Optional[int] = Field(default=None, description="Unit of measure")
    quantity: Optional[Decimal] = Field(default=None, description="Quantity (must be > 0)")
    unit_price: Optional[Decimal] = Field(default=None, description="Price per unit (must be >= 0)")
    discount_percentage: Decimal = Field(default=ZERO, description="Discount percentage (0-100)")
    tax_percentage: Decimal = Field(default=ZERO, description="Tax percentage (0-100)")


class DocumentHeaderDTO(BaseModel):
    """Header fields shared by create and update commands"""

    party_id: Optional[int] = Field(default=None, description="Supplier or customer ID")
    warehouse_id: Optional[int] = Field(default=None, description="Warehouse ID")
    document_date: Optional[date] = Field(default=None, description="Order or receive date")
    expected_date: Optional[date] = Field(default=None, description="Expected delivery date")
    parent_order_id: Optional[int] = Field(default=None, description="Parent purchase order ID")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    status: str = Field(default="draft", description="Document status")
    currency: Optional[str] = Field(default=None, description="Currency code (ISO 4217)")
    items: List[LineItemInput] = Field(default_factory=list, description="Document lines")


class CreateDocumentCommandDTO(DocumentHeaderDTO):
    """
    Command DTO for creating a document

    Used as input to CreateDocument use case.
    """

    document_type: DocumentType = Field(..., description="Type of document to create")
    code: Optional[str] = Field(default=None, description="Document code (generated when empty)")

    class Config:
        json_schema_extra = {
            "example": {
                "document_type": "purchase_order",
                "party_id": 12,
                "document_date": "2024-03-01",
                "expected_date": "2024-03-15",
                "status": "draft",
                "items": [
                    {
                        "product_id": 7,
                        "product_specification_id": 31,
                        "quantity": "10",
                        "unit_price": "1000",
                        "discount_percentage": "10",
                        "tax_percentage": "5"
                    }
                ]
            }
        }


class UpdateDocumentCommandDTO(DocumentHeaderDTO):
    """
    Command DTO for updating a document

    The document type and code never change; lines are replaced wholesale.
    """


class PayloadLineDTO(LineItemInput):
    """Validated line with its computed amounts"""

    position: int
    quantity: Decimal
    unit_price: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal


class DocumentPayload(BaseModel):
    """
    Validated document ready to persist

    Produced by assemble_document from a header and its lines.
    """

    document_type: DocumentType
    party_id: int
    warehouse_id: Optional[int] = None
    document_date: date
    expected_date: Optional[date] = None
    parent_order_id: Optional[int] = None
    notes: Optional[str] = None
    status: str
    currency: Optional[str] = None
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    final_amount: Decimal
    lines: List[PayloadLineDTO]


class DocumentLineDTO(BaseModel):
    """Line of a stored document"""

    id: int
    position: int
    product_id: int
    product_specification_id: Optional[int] = None
    product_name: Optional[str] = None
    unit_id: Optional[int] = None
    quantity: Decimal
    unit_price: Decimal
    discount_percentage: Decimal
    tax_percentage: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal


class DocumentSummaryDTO(BaseModel):
    """Document header as shown in lists"""

    id: int
    document_type: str
    code: str
    party_id: int
    supplier_id: Optional[int] = None
    customer_id: Optional[int] = None
    warehouse_id: Optional[int] = None
    parent_order_id: Optional[int] = None
    document_date: date
    expected_date: Optional[date] = None
    status: str
    currency: str
    notes: Optional[str] = None
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    final_amount: Decimal
    created_at: datetime
    updated_at: datetime


class DocumentResponseDTO(DocumentSummaryDTO):
    """
    Response DTO for a single document with its lines

    Returned by CreateDocument, UpdateDocument and GetDocument.
    """

    items: List[DocumentLineDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "document_type": "purchase_order",
                "code": "PO-2024-000001",
                "party_id": 12,
                "supplier_id": 12,
                "customer_id": None,
                "document_date": "2024-03-01",
                "status": "draft",
                "currency": "VND",
                "total_amount": "10000.000000",
                "discount_amount": "1000.000000",
                "tax_amount": "450.000000",
                "final_amount": "9450.000000",
                "items": [
                    {
                        "id": 1,
                        "position": 1,
                        "product_id": 7,
                        "quantity": "10.000000",
                        "unit_price": "1000.000000",
                        "discount_percentage": "10.000000",
                        "tax_percentage": "5.000000",
                        "subtotal": "10000.000000",
                        "discount_amount": "1000.000000",
                        "tax_amount": "450.000000",
                        "total_amount": "9450.000000"
                    }
                ],
                "created_at": "2024-03-01T08:00:00Z",
                "updated_at": "2024-03-01T08:00:00Z"
            }
        }


class ListDocumentsResponseDTO(BaseModel):
    """Paginated document list"""

    documents: List[DocumentSummaryDTO]
    total: int
    limit: int
    offset: int


class PreviewLineInput(BaseModel):
    """Line exactly as typed; any field may be empty or not yet a number"""

    product_id: Optional[int] = None
    product_specification_id: Optional[int] = None
    quantity: Any = None
    unit_price: Any = None
    discount_percentage: Any = None
    tax_percentage: Any = None


class PreviewTotalsCommandDTO(BaseModel):
    """Command DTO for live totals recalculation"""

    items: List[PreviewLineInput] = Field(default_factory=list)


class PreviewLineDTO(BaseModel):
    """Computed amounts of one previewed line"""

    position: int
    product_id: Optional[int] = None
    product_specification_id: Optional[int] = None
    subtotal: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    total: Decimal


class PreviewTotalsResponseDTO(BaseModel):
    """Live totals for a document form"""

    lines: List[PreviewLineDTO]
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    final_amount: Decimal


class FulfillmentLineInput(BaseModel):
    """Order or receipt line used to resolve remaining quantities"""

    product_id: int
    product_specification_id: Optional[int] = None
    product_name: Optional[str] = None
    unit_id: Optional[int] = None
    quantity: Decimal = ZERO
    unit_price: Optional[Decimal] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_or_zero(cls, v):
        """Stored records may carry a null or blank quantity; it counts as nothing"""
        return coerce_decimal(v)


class RemainingQuantitiesCommandDTO(BaseModel):
    """Order lines and prior receipts supplied by the caller"""

    purchase_order_id: Optional[int] = None
    order_lines: List[FulfillmentLineInput] = Field(default_factory=list)
    receipts: List[List[FulfillmentLineInput]] = Field(default_factory=list)


class RemainingQuantitiesResponseDTO(BaseModel):
    """
    Outstanding quantities of a purchase order

    fully_received is True when no line is left to receive; lines is then
    empty and message explains why.
    """

    purchase_order_id: Optional[int] = None
    supplier_id: Optional[int] = None
    fully_received: bool
    message: Optional[str] = None
    lines: List[RemainingLine] = Field(default_factory=list)


class DocumentPdfResponseDTO(BaseModel):
    """Rendered document"""

    document_id: int
    code: str
    pdf_base64: str
    generated_at: datetime
