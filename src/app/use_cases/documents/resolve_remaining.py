"""Remaining Quantity Use Cases

Used when a purchase receive is attached to a purchase order: works out what
is still to be received so the receive form only offers outstanding lines.
The result is computed fresh on every call.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.document_repository import DocumentRepository
from src.app.repositories.document_line_repository import DocumentLineRepository
from src.domain.document import CONFIRMED_STATUS, DocumentType
from src.domain.fulfillment import resolve_remaining
from .dtos import RemainingQuantitiesCommandDTO, RemainingQuantitiesResponseDTO

FULLY_RECEIVED_MESSAGE = "This purchase order has already been fully received"


def _response(purchase_order_id, supplier_id, remaining) -> RemainingQuantitiesResponseDTO:
    return RemainingQuantitiesResponseDTO(
        purchase_order_id=purchase_order_id,
        supplier_id=supplier_id,
        fully_received=not remaining,
        message=None if remaining else FULLY_RECEIVED_MESSAGE,
        lines=remaining,
    )


class ResolveRemainingQuantities:
    """
    Use Case: Outstanding quantities of a stored purchase order

    Business Rules:
    1. Document must exist and be a confirmed purchase order
    2. Every purchase receive referencing the order counts, except the one
       being edited (exclude_receive_id)
    3. Lines already fully received are omitted
    4. Nothing left to receive is reported with fully_received=True, not as
       an error
    """

    def __init__(
        self,
        document_repo: DocumentRepository,
        line_repo: DocumentLineRepository,
    ):
        self.document_repo = document_repo
        self.line_repo = line_repo

    async def execute(
        self, purchase_order_id: int, exclude_receive_id: Optional[int] = None
    ) -> Result[RemainingQuantitiesResponseDTO]:
        """
        Execute remaining quantity resolution

        Args:
            purchase_order_id: Purchase order being received
            exclude_receive_id: Receive to leave out of the received totals

        Returns:
            Result[RemainingQuantitiesResponseDTO]: Outstanding lines or error
        """
        order = await self.document_repo.get_by_id(purchase_order_id)
        if not order:
            return Return.err(
                Error(
                    code="DOCUMENT_NOT_FOUND",
                    message=f"Document with ID {purchase_order_id} not found",
                    reason="Document does not exist",
                )
            )

        if order.document_type != DocumentType.PURCHASE_ORDER:
            return Return.err(
                Error(
                    code="INVALID_DOCUMENT_TYPE",
                    message=f"Document {order.code} is not a purchase order",
                    reason="Only purchase orders can be received",
                )
            )

        if order.status != CONFIRMED_STATUS:
            return Return.err(
                Error(
                    code="PARENT_ORDER_NOT_CONFIRMED",
                    message=f"Purchase order {order.code} is not confirmed",
                    reason="Only confirmed purchase orders can be received",
                    details={"status": order.status},
                )
            )

        order_lines = await self.line_repo.get_by_document_id(purchase_order_id)
        receipts = await self.document_repo.get_receipts_for_order(
            purchase_order_id, exclude_document_id=exclude_receive_id
        )
        receipt_lines = await self.line_repo.get_by_document_ids(
            [receipt.id for receipt in receipts]
        )

        remaining = resolve_remaining(order_lines, receipt_lines.values())
        return Return.ok(_response(order.id, order.party_id, remaining))


class ComputeRemainingQuantities:
    """
    Use Case: Outstanding quantities for caller-supplied documents

    Same rules as ResolveRemainingQuantities, applied to an order and receipts
    passed in directly instead of loaded from storage.
    """

    async def execute(
        self, command: RemainingQuantitiesCommandDTO
    ) -> Result[RemainingQuantitiesResponseDTO]:
        if not command.order_lines:
            return Return.err(
                Error(
                    code="ITEMS_REQUIRED",
                    message="The purchase order has no lines",
                    reason="Nothing to resolve",
                    details={"field": "order_lines"},
                )
            )

        remaining = resolve_remaining(command.order_lines, command.receipts)
        return Return.ok(_response(command.purchase_order_id, None, remaining))
