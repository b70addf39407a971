"""Document Line Domain Entity

Tracks the product lines of a document. Lines are never addressed on their
own: they are created with their document and replaced wholesale on edit.
"""

from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, Integer, Numeric, String
from src.domain.base import BaseModel, IdType


class DocumentLine(BaseModel, table=True):
    """
    Document Line - One product/specification row of a document

    Domain Rules:
    - Each line belongs to exactly one document
    - quantity > 0, unit_price >= 0, discount and tax percentages in [0, 100]
    - subtotal = quantity * unit_price
    - total_amount = subtotal - discount_amount + tax_amount
    - position keeps display order (1-based)
    """

    __tablename__ = "document_lines"
    __table_args__ = (
        Index('ix_document_lines_document_id', 'document_id'),
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique line identifier (auto-increment)"
    )

    document_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Document"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="1-based display position"
    )

    product_id: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Product reference"
    )

    product_specification_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Product specification (variant) reference"
    )

    product_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Product name at the time the line was written"
    )

    unit_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger, nullable=True),
        description="Unit of measure reference"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Price per unit"
    )

    discount_percentage: Decimal = Field(
        sa_column=Column(Numeric(9, 6), nullable=False),
        description="Discount percentage (0-100)"
    )

    tax_percentage: Decimal = Field(
        sa_column=Column(Numeric(9, 6), nullable=False),
        description="Tax percentage (0-100)"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="quantity * unit_price"
    )

    discount_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="subtotal * discount_percentage / 100"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="(subtotal - discount_amount) * tax_percentage / 100"
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Line total after discount and tax"
    )
