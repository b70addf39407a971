"""Document API Routes

FastAPI routes for purchase orders, purchase receives and sales orders.
"""

import base64
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError
from src.api.schemas.document_request import (
    CreateDocumentRequestSchema,
    PreviewTotalsRequestSchema,
    RemainingQuantitiesRequestSchema,
    UpdateDocumentRequestSchema,
)
from src.app.services.pdf_service import PdfService
from src.app.use_cases.documents import (
    VALIDATION_ERROR_CODES,
    ComputeRemainingQuantities,
    CreateDocument,
    DeleteDocument,
    GetDocument,
    ListDocuments,
    PreviewDocumentTotals,
    RenderDocumentPdf,
    ResolveRemainingQuantities,
    UpdateDocument,
)
from src.app.use_cases.documents.dtos import (
    DocumentResponseDTO,
    ListDocumentsResponseDTO,
    PreviewTotalsResponseDTO,
    RemainingQuantitiesResponseDTO,
)
from src.adapter.repositories.document_repository import SqlAlchemyDocumentRepository
from src.adapter.repositories.document_line_repository import SqlAlchemyDocumentLineRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_pdf_service, get_session
from src.domain.document import DocumentType

router = APIRouter(tags=["Documents"])

ERROR_STATUS = {
    "DOCUMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PARENT_ORDER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PARENT_ORDER_NOT_CONFIRMED": status.HTTP_409_CONFLICT,
    "DOCUMENT_CODE_EXISTS": status.HTTP_409_CONFLICT,
    "DOCUMENT_HAS_RECEIPTS": status.HTTP_409_CONFLICT,
    "INVALID_DOCUMENT_TYPE": status.HTTP_400_BAD_REQUEST,
}

VALIDATION_RESPONSES = {
    400: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVALID_QUANTITY",
                        "message": "Item 2: quantity of \"Steel pipe 40mm\" must be greater than 0",
                        "details": {"field": "quantity", "item_index": 2, "item_label": "Steel pipe 40mm"}
                    }
                }
            }
        }
    },
    404: {
        "description": "Document not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "DOCUMENT_NOT_FOUND",
                        "message": "Document with ID 123 not found"
                    }
                }
            }
        }
    },
}


def raise_for_error(error: Error):
    if error.code in VALIDATION_ERROR_CODES:
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code in ERROR_STATUS:
        raise ClientError(error, status_code=ERROR_STATUS[error.code])
    if error.code.endswith("_FAILED"):
        raise ClientError(error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise ClientError(error)


@router.post(
    "/documents/preview",
    response_model=PreviewTotalsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def preview_totals(request: PreviewTotalsRequestSchema):
    """
    Recompute line amounts and totals for a form being edited.

    Values are taken as typed: empty or non-numeric input counts as 0 and
    nothing is validated. Use this for the running totals shown while the
    user types.
    """
    result = await PreviewDocumentTotals().execute(request.to_command())
    return result.value


@router.post(
    "/documents",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses=VALIDATION_RESPONSES,
)
async def create_document(
    request: CreateDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a purchase order, purchase receive or sales order with its lines.

    Header and lines are written in one transaction. Totals are computed by
    the server from the lines.

    **Returns:**
    - 201: Document created
    - 400: Validation error (first failing check)
    - 404: Linked purchase order not found
    - 409: Document code already in use
    """
    use_case = CreateDocument(
        uow=SqlAlchemyUnitOfWork(session),
        document_repo=SqlAlchemyDocumentRepository(session),
        line_repo=SqlAlchemyDocumentLineRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(request.to_command())

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/documents",
    response_model=ListDocumentsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_documents(
    document_type: Optional[DocumentType] = Query(default=None),
    status_filter: Optional[str] = Query(default=None, alias="status"),
    party_id: Optional[int] = Query(default=None),
    purchase_order_id: Optional[int] = Query(default=None),
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    """
    List documents, newest first.

    **Query parameters:**
    - `document_type`: purchase_order, purchase_receive or sales_order
    - `status`: exact status match
    - `party_id`: supplier or customer
    - `purchase_order_id`: receives of one purchase order
    - `limit` / `offset`: pagination
    """
    use_case = ListDocuments(SqlAlchemyDocumentRepository(session))
    result = await use_case.execute(
        document_type=document_type,
        status=status_filter,
        party_id=party_id,
        parent_order_id=purchase_order_id,
        limit=limit,
        offset=offset,
    )
    return result.value


@router.get(
    "/documents/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=VALIDATION_RESPONSES,
)
async def get_document(
    document_id: int,
    session: AsyncSession = Depends(get_session),
):
    """Retrieve a document with its lines."""
    use_case = GetDocument(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineRepository(session),
    )
    result = await use_case.execute(document_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/documents/{document_id}",
    response_model=DocumentResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=VALIDATION_RESPONSES,
)
async def update_document(
    document_id: int,
    request: UpdateDocumentRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Save an edited document.

    Every stored line is replaced by the submitted lines in the same
    transaction as the header update.
    """
    use_case = UpdateDocument(
        uow=SqlAlchemyUnitOfWork(session),
        document_repo=SqlAlchemyDocumentRepository(session),
        line_repo=SqlAlchemyDocumentLineRepository(session),
    )
    result = await use_case.execute(document_id, request.to_command())

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/documents/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_document(
    document_id: int,
    session: AsyncSession = Depends(get_session),
):
    """
    Delete a document and its lines.

    A purchase order that already has receives cannot be deleted (409).
    """
    use_case = DeleteDocument(
        uow=SqlAlchemyUnitOfWork(session),
        document_repo=SqlAlchemyDocumentRepository(session),
        line_repo=SqlAlchemyDocumentLineRepository(session),
    )
    result = await use_case.execute(document_id)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/documents/{document_id}/remaining",
    response_model=RemainingQuantitiesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_remaining_quantities(
    document_id: int,
    exclude_receive_id: Optional[int] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """
    Outstanding quantities of a confirmed purchase order.

    Sums every purchase receive recorded against the order (except
    `exclude_receive_id`, the receive being edited) and returns the lines
    still to be received. When nothing is left, `fully_received` is true and
    `lines` is empty. An order that is not confirmed answers 409
    PARENT_ORDER_NOT_CONFIRMED.
    """
    use_case = ResolveRemainingQuantities(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineRepository(session),
    )
    result = await use_case.execute(document_id, exclude_receive_id=exclude_receive_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/fulfillment/remaining",
    response_model=RemainingQuantitiesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def compute_remaining_quantities(request: RemainingQuantitiesRequestSchema):
    """
    Outstanding quantities for an order and receipts supplied in the request.

    Records may be sent in the envelope the REST backend returned them in:
    a bare array, `{"data": [...]}` or `{"data": {"data": [...]}}`.
    """
    try:
        command = request.to_command()
    except ValueError as e:
        raise ClientError(
            Error(
                code="INVALID_REQUEST",
                message="Order or receipt records could not be decoded",
                reason=str(e),
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    result = await ComputeRemainingQuantities().execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/documents/{document_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
    },
)
async def download_document_pdf(
    document_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """Download a printable PDF of the document."""
    use_case = RenderDocumentPdf(
        SqlAlchemyDocumentRepository(session),
        SqlAlchemyDocumentLineRepository(session),
        pdf_service,
        company_name=ApplicationConfig.COMPANY_NAME,
        company_address=ApplicationConfig.COMPANY_ADDRESS,
    )
    result = await use_case.execute(document_id)

    if result.is_err():
        raise_for_error(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.code}.pdf"
        }
    )
