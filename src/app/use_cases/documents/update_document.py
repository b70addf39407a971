"""UpdateDocument Use Case

Saves an edited document. Lines are replaced wholesale: every stored line is
deleted and the submitted lines are recreated, inside one transaction.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from .assemble_document import assemble_document
from .create_document import check_parent_order
from .dtos import UpdateDocumentCommandDTO, DocumentResponseDTO
from .mappers import apply_payload, build_lines, to_response_dto

logger = logging.getLogger(__name__)


class UpdateDocument:
    """
    Use Case: Update a document and replace its lines

    Business Rules:
    1. Document must exist
    2. Document type and code never change
    3. Same validation as creation
    4. Old lines are deleted and new lines created in the same transaction,
       so a failure leaves the stored document untouched

    Flow:
    1. Retrieve document
    2. Assemble and validate the payload
    3. Update header
    4. Delete existing lines, create submitted lines
    5. Commit transaction
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

    async def execute(
        self, document_id: int, command: UpdateDocumentCommandDTO
    ) -> Result[DocumentResponseDTO]:
        """
        Execute document update

        Args:
            document_id: Document to update
            command: UpdateDocumentCommandDTO with header fields and lines

        Returns:
            Result[DocumentResponseDTO]: Updated document or error
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

            # Step 2: Validate and compute totals
            assembled = assemble_document(document.document_type, command)
            if assembled.is_err():
                return assembled
            payload = assembled.value

            if payload.parent_order_id == document.id:
                return Return.err(
                    Error(
                        code="PARENT_ORDER_NOT_FOUND",
                        message="A document cannot reference itself",
                        reason="Invalid parent order",
                        details={"field": "purchase_order_id"},
                    )
                )
            parent_error = await check_parent_order(self.document_repo, payload.parent_order_id)
            if parent_error:
                return Return.err(parent_error)

            # Step 3: Update header
            apply_payload(document, payload)
            updated_document = await self.document_repo.update(document)

            # Step 4: Replace lines
            removed = await self.line_repo.delete_by_document_id(document_id)
            created_lines = await self.line_repo.create_many(build_lines(document_id, payload))

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Updated {updated_document.code}: replaced {removed} lines "
                f"with {len(created_lines)}"
            )

            return Return.ok(to_response_dto(updated_document, created_lines))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to update document {document_id}")
            return Return.err(
                Error(
                    code="UPDATE_DOCUMENT_FAILED",
                    message="Failed to save document",
                    reason=str(e),
                )
            )
