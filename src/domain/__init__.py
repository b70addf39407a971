from .base import BaseModel, generate_uuid, utcnow
from .document import Document, DocumentType
from .document_line import DocumentLine
from .fulfillment import RemainingLine, resolve_remaining
from .pricing import DocumentTotals, LineAmounts, aggregate, compute_line_total

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utcnow",
    "Document",
    "DocumentType",
    "DocumentLine",
    "RemainingLine",
    "resolve_remaining",
    "DocumentTotals",
    "LineAmounts",
    "aggregate",
    "compute_line_total",
]
