"""SQLAlchemy Document Repository Implementation

Implements document persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_repository import DocumentRepository
from src.domain.base import utcnow
from src.domain.document import Document, DocumentType


class SqlAlchemyDocumentRepository(DocumentRepository):
    """
    SQLAlchemy implementation of DocumentRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def get_by_id(self, document_id: int) -> Optional[Document]:
        statement = select(Document).where(Document.id == document_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_code(self, code: str) -> Optional[Document]:
        statement = select(Document).where(Document.code == code)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list(
        self,
        document_type: Optional[DocumentType] = None,
        status: Optional[str] = None,
        party_id: Optional[int] = None,
        parent_order_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Tuple[List[Document], int]:
        """
        List documents, newest first

        Returns:
            Tuple of (documents, total matching count)
        """
        conditions = []
        if document_type:
            conditions.append(Document.document_type == document_type)
        if status:
            conditions.append(Document.status == status)
        if party_id is not None:
            conditions.append(Document.party_id == party_id)
        if parent_order_id is not None:
            conditions.append(Document.parent_order_id == parent_order_id)

        count_statement = select(func.count()).select_from(Document).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar_one()

        statement = (
            select(Document)
            .where(*conditions)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all()), total

    async def get_receipts_for_order(
        self, purchase_order_id: int, exclude_document_id: Optional[int] = None
    ) -> List[Document]:
        statement = (
            select(Document)
            .where(Document.document_type == DocumentType.PURCHASE_RECEIVE)
            .where(Document.parent_order_id == purchase_order_id)
        )
        if exclude_document_id is not None:
            statement = statement.where(Document.id != exclude_document_id)

        result = await self.session.execute(statement.order_by(Document.id))
        return list(result.scalars().all())

    async def update(self, document: Document) -> Document:
        document.updated_at = utcnow()
        self.session.add(document)
        await self.session.flush()
        await self.session.refresh(document)
        return document

    async def delete(self, document: Document) -> None:
        await self.session.delete(document)
        await self.session.flush()

    async def generate_code(self, document_type: DocumentType) -> str:
        """
        Generate a unique document code

        Format: PREFIX-YYYY-NNNNNN (e.g., PO-2024-000001)

        Codes supplied by clients may share the prefix; only all-digit
        sequences count, compared by value so the sequence can grow past
        six digits.

        Returns:
            Unique code string
        """
        year = utcnow().year
        prefix = f"{document_type.code_prefix}-{year}-"

        statement = select(Document.code).where(Document.code.like(f"{prefix}%"))
        result = await self.session.execute(statement)

        sequences = [
            int(tail)
            for tail in (code[len(prefix):] for code in result.scalars().all())
            if tail.isdecimal()
        ]
        sequence = max(sequences, default=0) + 1

        return f"{prefix}{sequence:06d}"
