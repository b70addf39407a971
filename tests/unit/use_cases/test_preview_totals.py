"""Unit tests for PreviewDocumentTotals use case"""

import pytest
from decimal import Decimal

from src.app.use_cases.documents import PreviewDocumentTotals, PreviewTotalsCommandDTO
from src.app.use_cases.documents.dtos import PreviewLineInput


@pytest.mark.asyncio
class TestPreviewDocumentTotals:

    async def test_totals_for_typed_lines(self):
        command = PreviewTotalsCommandDTO(
            items=[
                PreviewLineInput(product_id=7, quantity="10", unit_price="1,000", discount_percentage="10", tax_percentage="5"),
                PreviewLineInput(product_id=8, quantity=2, unit_price=250.0),
            ]
        )

        result = await PreviewDocumentTotals().execute(command)

        assert result.is_ok()
        preview = result.value
        assert [line.position for line in preview.lines] == [1, 2]
        assert preview.lines[0].total == Decimal("9450")
        assert preview.lines[1].total == Decimal("500")
        assert preview.total_amount == Decimal("10500")
        assert preview.discount_amount == Decimal("1000")
        assert preview.tax_amount == Decimal("450")
        assert preview.final_amount == Decimal("9950")

    async def test_unfinished_input_counts_as_zero(self):
        """Half-typed values never fail; they just contribute nothing"""
        command = PreviewTotalsCommandDTO(
            items=[
                PreviewLineInput(quantity="", unit_price="12"),
                PreviewLineInput(quantity="3", unit_price="abc"),
                PreviewLineInput(quantity="2", unit_price="5", tax_percentage=None),
            ]
        )

        result = await PreviewDocumentTotals().execute(command)

        assert result.is_ok()
        assert result.value.lines[0].total == Decimal("0")
        assert result.value.lines[1].total == Decimal("0")
        assert result.value.final_amount == Decimal("10")

    async def test_no_lines(self):
        result = await PreviewDocumentTotals().execute(PreviewTotalsCommandDTO())

        assert result.value.lines == []
        assert result.value.final_amount == Decimal("0")

    async def test_huge_exponent_counts_as_zero(self):
        """A typed exponent far outside any amount never breaks the totals"""
        command = PreviewTotalsCommandDTO(
            items=[
                PreviewLineInput(quantity="9e999999", unit_price="10"),
                PreviewLineInput(quantity="2", unit_price="5", tax_percentage="1e999999"),
                PreviewLineInput(quantity="1", unit_price="3"),
            ]
        )

        result = await PreviewDocumentTotals().execute(command)

        assert result.is_ok()
        assert result.value.lines[0].total == Decimal("0")
        assert result.value.lines[1].total == Decimal("10")
        assert result.value.final_amount == Decimal("13")
