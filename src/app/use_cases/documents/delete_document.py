"""DeleteDocument Use Case

Deletes a document and its lines in one transaction.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document import DocumentType

logger = logging.getLogger(__name__)


class DeleteDocument:
    """
    Use Case: Delete a document

    Business Rules:
    1. Document must exist
    2. A purchase order that already has receives cannot be deleted
    3. Lines and header are removed together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_repo: DocumentLineRepository,
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo

    async def execute(self, document_id: int) -> Result[int]:
        """
        Execute document deletion

        Args:
            document_id: Document to delete

        Returns:
            Result[int]: ID of the deleted document or error
        """
        try:
            document = await self.document_repo.get_by_id(document_id)
            if not document:
                return Return.err(
                    Error(
                        code="DOCUMENT_NOT_FOUND",
                        message=f"Document with ID {document_id} not found",
                        reason="Document does not exist",
                    )
                )

            if document.document_type == DocumentType.PURCHASE_ORDER:
                receipts = await self.document_repo.get_receipts_for_order(document_id)
                if receipts:
                    return Return.err(
                        Error(
                            code="DOCUMENT_HAS_RECEIPTS",
                            message=f"Purchase order {document.code} already has "
                                    f"{len(receipts)} receive(s) and cannot be deleted",
                            reason="Receives reference this purchase order",
                        )
                    )

            await self.line_repo.delete_by_document_id(document_id)
            await self.document_repo.delete(document)
            await self.uow.commit()

            logger.info(f"Deleted document {document.code}")
            return Return.ok(document_id)

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to delete document {document_id}")
            return Return.err(
                Error(
                    code="DELETE_DOCUMENT_FAILED",
                    message="Failed to delete document",
                    reason=str(e),
                )
            )
