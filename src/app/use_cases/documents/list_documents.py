"""
List Documents Use Case

Lists document headers with optional filters and pagination.
"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.document_repository import DocumentRepository
from src.domain.document import DocumentType
from .dtos import ListDocumentsResponseDTO
from .mappers import to_summary_dto


class ListDocuments:
    """
    Use case: List documents

    Documents are ordered by created_at DESC (most recent first).
    """

    def __init__(self, document_repo: DocumentRepository):
        """
        Initialize with document repository.

        Args:
            document_repo: DocumentRepository instance
        """
        self.document_repo = document_repo

    async def execute(
        self,
        document_type: Optional[DocumentType] = None,
        status: Optional[str] = None,
        party_id: Optional[int] = None,
        parent_order_id: Optional[int] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[ListDocumentsResponseDTO]:
        """
        List documents with pagination.

        Args:
            document_type: Optional filter by document type
            status: Optional filter by status
            party_id: Optional filter by supplier/customer
            parent_order_id: Optional filter by parent purchase order
            limit: Maximum number of documents to return (default 20)
            offset: Number of documents to skip (default 0)

        Returns:
            Result[ListDocumentsResponseDTO]: Paginated document list
        """
        documents, total = await self.document_repo.list(
            document_type=document_type,
            status=status,
            party_id=party_id,
            parent_order_id=parent_order_id,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListDocumentsResponseDTO(
                documents=[to_summary_dto(document) for document in documents],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
