"""Unit tests for response envelope decoding and request schemas"""

import pytest
from datetime import date
from decimal import Decimal
from pydantic import ValidationError

from src.api.schemas.decoders import extract_lines, unwrap_collection, unwrap_record
from src.api.schemas.document_request import (
    CreateDocumentRequestSchema,
    RemainingQuantitiesRequestSchema,
    UpdateDocumentRequestSchema,
)
from src.domain.document import DocumentType


class TestUnwrapCollection:

    @pytest.mark.parametrize(
        "payload",
        [
            [{"id": 1}, {"id": 2}],
            {"data": [{"id": 1}, {"id": 2}]},
            {"data": {"data": [{"id": 1}, {"id": 2}]}},
        ],
    )
    def test_envelopes(self, payload):
        assert unwrap_collection(payload) == [{"id": 1}, {"id": 2}]

    def test_missing_is_empty(self):
        assert unwrap_collection(None) == []
        assert unwrap_collection({"meta": {}}) == []

    def test_rejects_scalars(self):
        with pytest.raises(ValueError):
            unwrap_collection("oops")


class TestUnwrapRecord:

    def test_nested_data(self):
        assert unwrap_record({"data": {"data": {"id": 10}}}) == {"id": 10}

    def test_record_with_lines_is_not_unwrapped(self):
        record = {"id": 10, "items": [], "data": {"note": "x"}}

        assert unwrap_record(record) is record

    def test_rejects_list(self):
        with pytest.raises(ValueError):
            unwrap_record([1, 2])


class TestExtractLines:

    def test_bare_list(self):
        assert extract_lines([{"product_id": 1}]) == [{"product_id": 1}]

    def test_purchase_order_items_key(self):
        record = {"data": {"id": 10, "purchase_order_items": {"data": [{"product_id": 1}]}}}

        assert extract_lines(record) == [{"product_id": 1}]

    def test_record_without_lines(self):
        assert extract_lines({"id": 10}) == []


class TestDocumentRequestSchema:

    def test_receive_maps_receive_fields(self):
        request = CreateDocumentRequestSchema(
            document_type="purchase_receive",
            supplier_id=12,
            customer_id=99,
            warehouse_id=3,
            order_date="2024-03-01",
            receive_date="2024-03-10T00:00:00.000Z",
            purchase_order_id=10,
            items=[{"product_id": 7, "quantity": "35", "unit_price": "1000", "tax_percentage": ""}],
        )

        command = request.to_command()

        assert command.document_type == DocumentType.PURCHASE_RECEIVE
        assert command.party_id == 12
        assert command.document_date == date(2024, 3, 10)
        assert command.parent_order_id == 10
        assert command.items[0].quantity == Decimal("35")
        assert command.items[0].tax_percentage == Decimal("0")

    def test_sales_order_uses_customer(self):
        command = CreateDocumentRequestSchema(
            document_type="sales_order", supplier_id=5, customer_id=8, order_date="2024-03-01",
        ).to_command()

        assert command.party_id == 8

    def test_missing_quantity_is_left_to_validation(self):
        request = CreateDocumentRequestSchema(
            document_type="purchase_order",
            supplier_id=1,
            order_date="2024-03-01",
            items=[{"product_id": 7, "quantity": "", "unit_price": "10"}],
        )

        assert request.to_command().items[0].quantity is None

    def test_non_numeric_quantity_is_rejected(self):
        with pytest.raises(ValidationError):
            CreateDocumentRequestSchema(
                document_type="purchase_order",
                supplier_id=1,
                order_date="2024-03-01",
                items=[{"product_id": 7, "quantity": "ten", "unit_price": "10"}],
            )

    def test_update_takes_whichever_party_and_date_is_sent(self):
        command = UpdateDocumentRequestSchema(customer_id=8, receive_date="2024-03-10").to_command()

        assert command.party_id == 8
        assert command.document_date == date(2024, 3, 10)


class TestRemainingQuantitiesRequestSchema:

    def test_decodes_enveloped_records(self):
        request = RemainingQuantitiesRequestSchema(
            order={"data": {"id": 10, "purchase_order_items": [
                {"product_id": 1, "product_specification_id": 5, "quantity": "100"},
            ]}},
            receipts={"data": {"data": [
                {"id": 21, "purchase_receive_items": [{"product_id": 1, "product_specification_id": 5, "quantity": "40"}]},
                {"id": 22, "items": {"data": [{"product_id": 1, "product_specification_id": 5, "quantity": 25}]}},
            ]}},
        )

        command = request.to_command()

        assert command.purchase_order_id == 10
        assert len(command.order_lines) == 1
        assert [len(receipt) for receipt in command.receipts] == [1, 1]
        assert command.receipts[1][0].quantity == Decimal("25")

    def test_bare_line_list_has_no_order_id(self):
        command = RemainingQuantitiesRequestSchema(order=[{"product_id": 1, "quantity": 2}]).to_command()

        assert command.purchase_order_id is None
        assert command.receipts == []

    def test_undecodable_line_raises_value_error(self):
        request = RemainingQuantitiesRequestSchema(order=[{"quantity": 2}])

        with pytest.raises(ValueError):
            request.to_command()

    def test_missing_receipt_quantity_counts_as_zero(self):
        request = RemainingQuantitiesRequestSchema(
            order=[{"product_id": 1, "quantity": "100"}],
            receipts=[
                {"items": [{"product_id": 1, "quantity": None}]},
                {"items": [{"product_id": 1, "quantity": ""}, {"product_id": 1}]},
            ],
        )

        command = request.to_command()

        assert [line.quantity for receipt in command.receipts for line in receipt] == [
            Decimal("0"), Decimal("0"), Decimal("0"),
        ]
