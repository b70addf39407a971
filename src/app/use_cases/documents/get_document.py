"""GetDocument Use Case

Loads a document with its lines in display order.
"""

from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from .dtos import DocumentResponseDTO
from .mappers import to_response_dto


class GetDocument:
    """Use Case: Retrieve one document with its lines"""

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_repo: DocumentLineRepository,
    ):
        self.document_repo = document_repo
        self.line_repo = line_repo

    async def execute(self, document_id: int) -> Result[DocumentResponseDTO]:
        document = await self.document_repo.get_by_id(document_id)
        if not document:
            return Return.err(
                Error(
                    code="DOCUMENT_NOT_FOUND",
                    message=f"Document with ID {document_id} not found",
                    reason="Document does not exist",
                )
            )

        lines = await self.line_repo.get_by_document_id(document_id)
        return Return.ok(to_response_dto(document, lines))
