"""Document Repository Interface

Defines the contract for document header persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple
from src.domain.document import Document, DocumentType


class DocumentRepository(ABC):
    """
    Repository interface for Document persistence

    Writes are flushed but never committed; the caller's unit of work owns
    the transaction.
    """

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """
        Create a new document header

        Args:
            document: Document entity to persist

        Returns:
            Created Document with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, document_id: int) -> Optional[Document]:
        """
        Retrieve document by ID

        Args:
            document_id: Document ID

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Document]:
        """
        Retrieve document by its unique code

        Args:
            code: Document code

        Returns:
            Document if found, None otherwise
        """
        pass

    @abstractmethod
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

        Args:
            document_type: Optional filter by document type
            status: Optional filter by status
            party_id: Optional filter by supplier/customer
            parent_order_id: Optional filter by parent purchase order
            limit: Maximum number of documents to return
            offset: Offset for pagination

        Returns:
            Tuple of (documents, total matching count)
        """
        pass

    @abstractmethod
    async def get_receipts_for_order(
        self, purchase_order_id: int, exclude_document_id: Optional[int] = None
    ) -> List[Document]:
        """
        Retrieve every purchase receive referencing a purchase order

        Args:
            purchase_order_id: Parent purchase order ID
            exclude_document_id: Receive to leave out (the one being edited)

        Returns:
            List of purchase receive documents
        """
        pass

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """
        Update an existing document header

        Args:
            document: Document entity with updated values

        Returns:
            Updated Document
        """
        pass

    @abstractmethod
    async def delete(self, document: Document) -> None:
        """
        Delete a document header

        Args:
            document: Document to delete
        """
        pass

    @abstractmethod
    async def generate_code(self, document_type: DocumentType) -> str:
        """
        Generate a unique document code

        Format: PREFIX-YYYY-NNNNNN (e.g., PO-2024-000001)

        Args:
            document_type: Type whose prefix is used

        Returns:
            Unique code string
        """
        pass
