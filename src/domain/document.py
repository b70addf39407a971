"""Document Domain Entity

Header of a purchase order, purchase receive (goods received) or sales order.
The three document kinds share one structure and one table.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Numeric, String, Date, DateTime, Text, Enum as SAEnum
from src.domain.base import BaseModel, IdType, utcnow


class DocumentType(str, Enum):
    """Kinds of order documents"""
    PURCHASE_ORDER = "purchase_order"
    PURCHASE_RECEIVE = "purchase_receive"
    SALES_ORDER = "sales_order"

    @property
    def code_prefix(self) -> str:
        return _CODE_PREFIXES[self]

    @property
    def party_field(self) -> str:
        """Name of the party reference as exchanged with clients"""
        if self is DocumentType.SALES_ORDER:
            return "customer_id"
        return "supplier_id"

    @property
    def date_field(self) -> str:
        if self is DocumentType.PURCHASE_RECEIVE:
            return "receive_date"
        return "order_date"


_CODE_PREFIXES = {
    DocumentType.PURCHASE_ORDER: "PO",
    DocumentType.PURCHASE_RECEIVE: "PR",
    DocumentType.SALES_ORDER: "SO",
}

DEFAULT_STATUS = "draft"
CONFIRMED_STATUS = "confirmed"


class Document(BaseModel, table=True):
    """
    Document - Header of an order or receipt

    Domain Rules:
    - code is unique across all document types
    - party_id is the supplier (purchase documents) or customer (sales orders)
    - warehouse_id is required for purchase receives
    - parent_order_id links a purchase receive to a confirmed purchase order
    - status is free-form (draft, confirmed, ...); only "confirmed" carries
      meaning, it opens a purchase order for receiving
    - total_amount = sum of line subtotals
    - final_amount = total_amount - discount_amount + tax_amount
    - a document always has at least one line
    """

    __tablename__ = "documents"
    __table_args__ = (
        Index('ix_documents_document_type', 'document_type'),
        Index('ix_documents_party_id', 'party_id'),
        Index('ix_documents_parent_order_id', 'parent_order_id'),
        Index('ix_documents_code', 'code', unique=True),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique document identifier (auto-increment)"
    )

    document_type: DocumentType = Field(
        sa_column=Column(
            SAEnum(
                DocumentType,
                native_enum=False,
                length=32,
                values_callable=lambda kinds: [kind.value for kind in kinds],
            ),
            nullable=False,
        ),
        description="purchase_order, purchase_receive or sales_order"
    )

    code: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unique document code (e.g., PO-2024-000001)"
    )

    party_id: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Supplier ID or customer ID"
    )

    warehouse_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Receiving warehouse"
    )

    parent_order_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Purchase order this receive fulfils"
    )

    document_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Order date or receive date"
    )

    expected_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Expected delivery date"
    )

    status: str = Field(
        default=DEFAULT_STATUS,
        sa_column=Column(String(32), nullable=False),
        description="Free-form status (draft, confirmed, ...)"
    )

    currency: str = Field(
        default="VND",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-text notes"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Sum of line subtotals (precision: 18,6)"
    )

    discount_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Sum of line discounts"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Sum of line taxes"
    )

    final_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="total_amount - discount_amount + tax_amount"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Document creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp"
    )
