from .document_repository import DocumentRepository
from .document_line_repository import DocumentLineRepository

__all__ = [
    "DocumentRepository",
    "DocumentLineRepository",
]
