"""RenderDocumentPdf Use Case

Renders a stored document as a printable PDF.
"""

import base64
from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.app.services.pdf_service import PdfService
from src.domain.base import utcnow
from .dtos import DocumentPdfResponseDTO


class RenderDocumentPdf:
    """
    Use Case: Render document PDF

    Flow:
    1. Retrieve document
    2. Retrieve its lines
    3. Render PDF using PDF service
    4. Return response with PDF as base64
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_repo: DocumentLineRepository,
        pdf_service: PdfService,
        company_name: str,
        company_address: str,
    ):
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.pdf_service = pdf_service
        self.company_name = company_name
        self.company_address = company_address

    async def execute(self, document_id: int) -> Result[DocumentPdfResponseDTO]:
        """
        Execute PDF rendering

        Args:
            document_id: Document to render

        Returns:
            Result[DocumentPdfResponseDTO]: Success with PDF or error
        """
        try:
            # Step 1: Retrieve document
            document = await self.document_repo.get_by_id(document_id)

            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document with ID {document_id} not found",
                        reason="Document does not exist",
                    )
                )

            # Step 2: Retrieve lines
            lines = await self.line_repo.get_by_document_id(document_id)

            # Step 3: Render PDF
            pdf_bytes = self.pdf_service.render_document(
                document=document,
                lines=lines,
                company_name=self.company_name,
                company_address=self.company_address,
            )

            # Step 4: Build response
            return Return.ok(
                DocumentPdfResponseDTO(
                    document_id=document.id,
                    code=document.code,
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_DOCUMENT_FAILED",
                    message="Failed to render document",
                    reason=str(e),
                )
            )
