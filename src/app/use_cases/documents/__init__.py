"""Document use cases"""
from .assemble_document import assemble_document, VALIDATION_ERROR_CODES
from .create_document import CreateDocument
from .update_document import UpdateDocument
from .get_document import GetDocument
from .list_documents import ListDocuments
from .delete_document import DeleteDocument
from .preview_totals import PreviewDocumentTotals
from .resolve_remaining import ResolveRemainingQuantities, ComputeRemainingQuantities
from .render_document_pdf import RenderDocumentPdf
from .dtos import (
    LineItemInput,
    DocumentHeaderDTO,
    CreateDocumentCommandDTO,
    UpdateDocumentCommandDTO,
    DocumentPayload,
    DocumentResponseDTO,
    ListDocumentsResponseDTO,
    PreviewTotalsCommandDTO,
    PreviewTotalsResponseDTO,
    RemainingQuantitiesCommandDTO,
    RemainingQuantitiesResponseDTO,
    DocumentPdfResponseDTO,
)

__all__ = [
    "assemble_document",
    "VALIDATION_ERROR_CODES",
    "CreateDocument",
    "UpdateDocument",
    "GetDocument",
    "ListDocuments",
    "DeleteDocument",
    "PreviewDocumentTotals",
    "ResolveRemainingQuantities",
    "ComputeRemainingQuantities",
    "RenderDocumentPdf",
    "LineItemInput",
    "DocumentHeaderDTO",
    "CreateDocumentCommandDTO",
    "UpdateDocumentCommandDTO",
    "DocumentPayload",
    "DocumentResponseDTO",
    "ListDocumentsResponseDTO",
    "PreviewTotalsCommandDTO",
    "PreviewTotalsResponseDTO",
    "RemainingQuantitiesCommandDTO",
    "RemainingQuantitiesResponseDTO",
    "DocumentPdfResponseDTO",
]
