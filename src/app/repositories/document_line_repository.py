"""Document Line Repository Interface

Defines the contract for document line persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, List
from src.domain.document_line import DocumentLine


class DocumentLineRepository(ABC):
    """
    Repository interface for DocumentLine persistence

    Lines are only ever written as a complete set for one document.
    """

    @abstractmethod
    async def get_by_document_id(self, document_id: int) -> List[DocumentLine]:
        """
        Retrieve all lines of a document ordered by position

        Args:
            document_id: Document ID

        Returns:
            List of DocumentLine items
        """
        pass

    @abstractmethod
    async def get_by_document_ids(self, document_ids: List[int]) -> Dict[int, List[DocumentLine]]:
        """
        Retrieve lines for several documents at once

        Args:
            document_ids: Document IDs

        Returns:
            Lines grouped by document ID (documents without lines map to [])
        """
        pass

    @abstractmethod
    async def create_many(self, lines: List[DocumentLine]) -> List[DocumentLine]:
        """
        Create document lines

        Args:
            lines: DocumentLine entities to persist

        Returns:
            Created lines with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_document_id(self, document_id: int) -> int:
        """
        Delete every line of a document

        Args:
            document_id: Document ID

        Returns:
            Number of deleted lines
        """
        pass
