"""Unit tests for RenderDocumentPdf use case"""

import base64
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.pdf_service import ReportLabPdfService
from src.app.use_cases.documents import RenderDocumentPdf
from src.domain.document import Document, DocumentType
from src.domain.document_line import DocumentLine


@pytest.fixture
def mock_pdf_service():
    """Mock PDF service"""
    return MagicMock()


@pytest.fixture
def sample_receive():
    return Document(
        id=20,
        document_type=DocumentType.PURCHASE_RECEIVE,
        code="PR-2024-000001",
        party_id=12,
        warehouse_id=3,
        parent_order_id=10,
        document_date=date(2024, 3, 10),
        status="draft",
        currency="VND",
        notes="Deliver to <dock 2> & sign",
        total_amount=Decimal("35000.000000"),
        discount_amount=Decimal("0.000000"),
        tax_amount=Decimal("3500.000000"),
        final_amount=Decimal("38500.000000"),
        created_at=datetime(2024, 3, 10, 8, 0, 0, tzinfo=timezone.utc),
        updated_at=datetime(2024, 3, 10, 8, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_lines():
    return [
        DocumentLine(
            id=1,
            document_id=20,
            position=1,
            product_id=7,
            product_name="Steel pipe <40mm>",
            quantity=Decimal("35.000000"),
            unit_price=Decimal("1000.000000"),
            discount_percentage=Decimal("0.000000"),
            tax_percentage=Decimal("10.000000"),
            subtotal=Decimal("35000.000000"),
            discount_amount=Decimal("0.000000"),
            tax_amount=Decimal("3500.000000"),
            total_amount=Decimal("38500.000000"),
        )
    ]


@pytest.mark.asyncio
class TestRenderDocumentPdf:

    async def test_returns_base64_pdf(
        self, mock_document_repo, mock_line_repo, mock_pdf_service, sample_receive, sample_lines
    ):
        # Arrange
        mock_document_repo.get_by_id = AsyncMock(return_value=sample_receive)
        mock_line_repo.get_by_document_id = AsyncMock(return_value=sample_lines)
        mock_pdf_service.render_document = MagicMock(return_value=b"%PDF-1.4 test")

        use_case = RenderDocumentPdf(
            mock_document_repo, mock_line_repo, mock_pdf_service,
            company_name="Inventory ERP", company_address="1 Main St",
        )

        # Act
        result = await use_case.execute(20)

        # Assert
        assert result.is_ok()
        assert result.value.document_id == 20
        assert result.value.code == "PR-2024-000001"
        assert base64.b64decode(result.value.pdf_base64) == b"%PDF-1.4 test"
        mock_pdf_service.render_document.assert_called_once_with(
            document=sample_receive,
            lines=sample_lines,
            company_name="Inventory ERP",
            company_address="1 Main St",
        )

    async def test_not_found(self, mock_document_repo, mock_line_repo, mock_pdf_service):
        mock_document_repo.get_by_id = AsyncMock(return_value=None)

        use_case = RenderDocumentPdf(mock_document_repo, mock_line_repo, mock_pdf_service, "ERP", "")
        result = await use_case.execute(404)

        assert result.error.code == "DOCUMENT_NOT_FOUND"
        mock_pdf_service.render_document.assert_not_called()

    async def test_render_failure(
        self, mock_document_repo, mock_line_repo, mock_pdf_service, sample_receive
    ):
        mock_document_repo.get_by_id = AsyncMock(return_value=sample_receive)
        mock_line_repo.get_by_document_id = AsyncMock(return_value=[])
        mock_pdf_service.render_document = MagicMock(side_effect=RuntimeError("font missing"))

        use_case = RenderDocumentPdf(mock_document_repo, mock_line_repo, mock_pdf_service, "ERP", "")
        result = await use_case.execute(20)

        assert result.error.code == "RENDER_DOCUMENT_FAILED"
        assert "font missing" in result.error.reason


class TestReportLabPdfService:

    def test_renders_pdf_with_markup_in_text(self, sample_receive, sample_lines):
        pdf_bytes = ReportLabPdfService().render_document(
            document=sample_receive,
            lines=sample_lines,
            company_name="Smith & Sons",
            company_address="12 <Harbour> Rd",
        )

        assert pdf_bytes.startswith(b"%PDF")
        assert len(pdf_bytes) > 1000
