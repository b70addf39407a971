"""CreateDocument Use Case

Creates a purchase order, purchase receive or sales order together with all
of its lines in a single transaction.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document import CONFIRMED_STATUS, Document, DocumentType
from .assemble_document import assemble_document
from .dtos import CreateDocumentCommandDTO, DocumentResponseDTO
from .mappers import apply_payload, build_lines, to_response_dto

logger = logging.getLogger(__name__)


async def check_parent_order(
    document_repo: DocumentRepository,
    parent_order_id: Optional[int],
) -> Optional[Error]:
    """Return an error unless parent_order_id is empty or names a confirmed purchase order"""
    if parent_order_id is None:
        return None

    parent = await document_repo.get_by_id(parent_order_id)
    if parent is None or parent.document_type != DocumentType.PURCHASE_ORDER:
        return Error(
            code="PARENT_ORDER_NOT_FOUND",
            message=f"Purchase order with ID {parent_order_id} not found",
            reason="A receive can only reference an existing purchase order",
            details={"field": "purchase_order_id"},
        )
    if parent.status != CONFIRMED_STATUS:
        return Error(
            code="PARENT_ORDER_NOT_CONFIRMED",
            message=f"Purchase order {parent.code} is not confirmed",
            reason="Only confirmed purchase orders can be received",
            details={"field": "purchase_order_id", "status": parent.status},
        )
    return None


class CreateDocument:
    """
    Use Case: Create a document with its lines

    Business Rules:
    1. Header and lines are validated before anything is written
    2. Totals are computed from the lines, never taken from the client
    3. Document code is generated (PREFIX-YYYY-NNNNNN) unless supplied
    4. Supplied codes must be unique
    5. A linked parent order must be an existing, confirmed purchase order
    6. Header and lines are committed together or not at all

    Flow:
    1. Assemble and validate the payload
    2. Check code uniqueness and parent order
    3. Create header, then lines
    4. Commit transaction
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        document_repo: DocumentRepository,
        line_repo: DocumentLineRepository,
        default_currency: str = "VND",
    ):
        self.uow = uow
        self.document_repo = document_repo
        self.line_repo = line_repo
        self.default_currency = default_currency

    async def execute(self, command: CreateDocumentCommandDTO) -> Result[DocumentResponseDTO]:
        """
        Execute document creation

        Args:
            command: CreateDocumentCommandDTO with header fields and lines

        Returns:
            Result[DocumentResponseDTO]: Created document or error
        """
        # Step 1: Validate and compute totals
        assembled = assemble_document(command.document_type, command)
        if assembled.is_err():
            return assembled
        payload = assembled.value

        try:
            # Step 2: Code uniqueness and parent order
            if command.code:
                existing = await self.document_repo.get_by_code(command.code)
                if existing:
                    return Return.err(
                        Error(
                            code="DOCUMENT_CODE_EXISTS",
                            message=f"Document code {command.code} is already in use",
                            reason="Document codes are unique",
                            details={"field": "code"},
                        )
                    )

            parent_error = await check_parent_order(self.document_repo, payload.parent_order_id)
            if parent_error:
                return Return.err(parent_error)

            code = command.code or await self.document_repo.generate_code(command.document_type)

            # Step 3: Create header, then lines
            document = Document(
                document_type=command.document_type,
                code=code,
                currency=self.default_currency,
            )
            apply_payload(document, payload)
            created_document = await self.document_repo.create(document)

            created_lines = await self.line_repo.create_many(
                build_lines(created_document.id, payload)
            )

            # Step 4: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created {command.document_type.value} {created_document.code} "
                f"with {len(created_lines)} lines, final amount {created_document.final_amount}"
            )

            # Step 5: Build response
            return Return.ok(to_response_dto(created_document, created_lines))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to create {command.document_type.value}")
            return Return.err(
                Error(
                    code="CREATE_DOCUMENT_FAILED",
                    message="Failed to save document",
                    reason=str(e),
                )
            )
