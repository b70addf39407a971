"""PDF Generation Service Interface

Defines the contract for printable document rendering.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.document import Document
from src.domain.document_line import DocumentLine


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders order documents for printing or sharing.
    """

    @abstractmethod
    def render_document(
        self,
        document: Document,
        lines: List[DocumentLine],
        company_name: str,
        company_address: str,
    ) -> bytes:
        """
        Render a document as PDF

        Args:
            document: Document header with totals
            lines: Lines of the document in display order
            company_name: Company name shown in the heading
            company_address: Company address shown under the name

        Returns:
            PDF document as bytes
        """
        pass
