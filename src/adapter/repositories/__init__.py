from .document_repository import SqlAlchemyDocumentRepository
from .document_line_repository import SqlAlchemyDocumentLineRepository

__all__ = [
    "SqlAlchemyDocumentRepository",
    "SqlAlchemyDocumentLineRepository",
]
