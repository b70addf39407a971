"""SQLAlchemy Document Line Repository Implementation

Implements document line persistence using SQLAlchemy async session.
"""

from typing import Dict, List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document_line import DocumentLine


class SqlAlchemyDocumentLineRepository(DocumentLineRepository):
    """
    SQLAlchemy implementation of DocumentLineRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_document_id(self, document_id: int) -> List[DocumentLine]:
        statement = (
            select(DocumentLine)
            .where(DocumentLine.document_id == document_id)
            .order_by(DocumentLine.position)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_document_ids(self, document_ids: List[int]) -> Dict[int, List[DocumentLine]]:
        grouped: Dict[int, List[DocumentLine]] = {document_id: [] for document_id in document_ids}
        if not document_ids:
            return grouped

        statement = (
            select(DocumentLine)
            .where(DocumentLine.document_id.in_(document_ids))
            .order_by(DocumentLine.document_id, DocumentLine.position)
        )
        result = await self.session.execute(statement)
        for line in result.scalars().all():
            grouped[line.document_id].append(line)
        return grouped

    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        self.session.add_all(lines)
        await self.session.flush()
        for line in lines:
            await self.session.refresh(line)
        return lines

    async def delete_by_document_id(self, document_id: int) -> int:
        statement = delete(DocumentLine).where(DocumentLine.document_id == document_id)
        result = await self.session.execute(statement)
        await self.session.flush()
        return result.rowcount or 0
