import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_document_repo():
    """Mock document repository"""
    return MagicMock()


@pytest.fixture
def mock_line_repo():
    """Mock document line repository"""
    return MagicMock()
