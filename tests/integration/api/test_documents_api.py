"""Integration tests for Document API endpoints"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from config import ApplicationConfig

PREFIX = ApplicationConfig.API_PREFIX


def order_payload(**overrides):
    payload = {
        "document_type": "purchase_order",
        "supplier_id": 12,
        "order_date": "2024-03-01",
        "expected_delivery_date": "2024-03-15",
        "items": [
            {
                "product_id": 1,
                "product_specification_id": 5,
                "product_name": "Steel pipe 40mm",
                "quantity": "10",
                "unit_price": "1000",
                "discount_percentage": "10",
                "tax_percentage": "5",
            }
        ],
    }
    payload.update(overrides)
    return payload


class TestDocumentsAPIIntegration:
    """Integration test suite for Document API endpoints"""

    @pytest.mark.asyncio
    async def test_create_purchase_order(self, client: AsyncClient):
        """POST /documents computes totals on the server and returns 201"""
        # Act
        response = await client.post(f"{PREFIX}/documents", json=order_payload())

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["document_type"] == "purchase_order"
        assert data["code"].startswith("PO-")
        assert data["supplier_id"] == 12
        assert data["status"] == "draft"
        assert Decimal(data["total_amount"]) == Decimal("10000")
        assert Decimal(data["discount_amount"]) == Decimal("1000")
        assert Decimal(data["tax_amount"]) == Decimal("450")
        assert Decimal(data["final_amount"]) == Decimal("9450")
        assert len(data["items"]) == 1
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_create_validation_error(self, client: AsyncClient):
        """Missing supplier returns 400 with a field reference"""
        response = await client.post(f"{PREFIX}/documents", json=order_payload(supplier_id=None))

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "PARTY_REQUIRED"
        assert error["details"]["field"] == "supplier_id"

    @pytest.mark.asyncio
    async def test_create_line_error_names_item(self, client: AsyncClient):
        payload = order_payload()
        payload["items"].append({"product_id": 2, "quantity": "0", "unit_price": "5"})

        response = await client.post(f"{PREFIX}/documents", json=payload)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_QUANTITY"
        assert error["details"]["item_index"] == 2
        assert error["details"]["item_label"] == "Item 2"

    @pytest.mark.asyncio
    async def test_create_rejects_non_numeric_quantity(self, client: AsyncClient):
        payload = order_payload()
        payload["items"][0]["quantity"] = "ten"

        response = await client.post(f"{PREFIX}/documents", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_duplicate_code_conflict(self, client: AsyncClient):
        first = await client.post(f"{PREFIX}/documents", json=order_payload(code="PO-MANUAL-1"))
        second = await client.post(f"{PREFIX}/documents", json=order_payload(code="PO-MANUAL-1"))

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"]["code"] == "DOCUMENT_CODE_EXISTS"

    @pytest.mark.asyncio
    async def test_get_update_and_list(self, client: AsyncClient):
        created = (await client.post(f"{PREFIX}/documents", json=order_payload())).json()

        update = order_payload(status="confirmed")
        update.pop("document_type")
        update["items"][0]["quantity"] = "20"
        updated = await client.put(f"{PREFIX}/documents/{created['id']}", json=update)

        assert updated.status_code == 200
        assert updated.json()["status"] == "confirmed"
        assert Decimal(updated.json()["final_amount"]) == Decimal("18900")

        fetched = await client.get(f"{PREFIX}/documents/{created['id']}")
        assert fetched.status_code == 200
        assert Decimal(fetched.json()["items"][0]["quantity"]) == Decimal("20")

        listed = await client.get(f"{PREFIX}/documents", params={"document_type": "purchase_order"})
        assert listed.status_code == 200
        assert listed.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_get_not_found(self, client: AsyncClient):
        response = await client.get(f"{PREFIX}/documents/999")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_preview_totals_is_permissive(self, client: AsyncClient):
        payload = {
            "items": [
                {"quantity": "10", "unit_price": "1000", "discount_percentage": "10", "tax_percentage": "5"},
                {"quantity": "", "unit_price": "abc"},
            ]
        }

        response = await client.post(f"{PREFIX}/documents/preview", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["final_amount"]) == Decimal("9450")
        assert Decimal(data["lines"][1]["total"]) == Decimal("0")

    @pytest.mark.asyncio
    async def test_preview_totals_with_huge_exponent(self, client: AsyncClient):
        payload = {"items": [{"quantity": "9e999999", "unit_price": "10"}, {"quantity": "2", "unit_price": "5"}]}

        response = await client.post(f"{PREFIX}/documents/preview", json=payload)

        assert response.status_code == 200
        assert Decimal(response.json()["lines"][0]["total"]) == Decimal("0")
        assert Decimal(response.json()["final_amount"]) == Decimal("10")

    @pytest.mark.asyncio
    async def test_receiving_flow(self, client: AsyncClient):
        """Create an order, receive part of it and read what is left"""
        order = (await client.post(f"{PREFIX}/documents", json=order_payload(status="confirmed"))).json()

        receive = {
            "document_type": "purchase_receive",
            "supplier_id": 12,
            "warehouse_id": 3,
            "receive_date": "2024-03-10T00:00:00.000Z",
            "purchase_order_id": order["id"],
            "items": [{"product_id": 1, "product_specification_id": 5, "quantity": "4", "unit_price": "1000"}],
        }
        created = await client.post(f"{PREFIX}/documents", json=receive)
        assert created.status_code == 201
        assert created.json()["code"].startswith("PR-")

        remaining = await client.get(f"{PREFIX}/documents/{order['id']}/remaining")
        assert remaining.status_code == 200
        data = remaining.json()
        assert data["fully_received"] is False
        assert Decimal(data["lines"][0]["quantity"]) == Decimal("6")

        blocked = await client.delete(f"{PREFIX}/documents/{order['id']}")
        assert blocked.status_code == 409

    @pytest.mark.asyncio
    async def test_receiving_a_draft_order_conflicts(self, client: AsyncClient):
        order = (await client.post(f"{PREFIX}/documents", json=order_payload())).json()

        receive = {
            "document_type": "purchase_receive",
            "supplier_id": 12,
            "warehouse_id": 3,
            "receive_date": "2024-03-10",
            "purchase_order_id": order["id"],
            "items": [{"product_id": 1, "product_specification_id": 5, "quantity": "4", "unit_price": "1000"}],
        }
        created = await client.post(f"{PREFIX}/documents", json=receive)
        remaining = await client.get(f"{PREFIX}/documents/{order['id']}/remaining")

        assert created.status_code == 409
        assert created.json()["error"]["code"] == "PARENT_ORDER_NOT_CONFIRMED"
        assert remaining.status_code == 409

    @pytest.mark.asyncio
    async def test_receive_without_warehouse(self, client: AsyncClient):
        receive = {
            "document_type": "purchase_receive",
            "supplier_id": 12,
            "receive_date": "2024-03-10",
            "items": [{"product_id": 1, "quantity": "4", "unit_price": "1000"}],
        }

        response = await client.post(f"{PREFIX}/documents", json=receive)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "WAREHOUSE_REQUIRED"

    @pytest.mark.asyncio
    async def test_remaining_for_sales_order_is_rejected(self, client: AsyncClient):
        sale = (await client.post(
            f"{PREFIX}/documents",
            json=order_payload(document_type="sales_order", supplier_id=None, customer_id=8),
        )).json()

        response = await client.get(f"{PREFIX}/documents/{sale['id']}/remaining")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DOCUMENT_TYPE"

    @pytest.mark.asyncio
    async def test_stateless_remaining(self, client: AsyncClient):
        payload = {
            "order": {"data": {"id": 10, "purchase_order_items": [
                {"product_id": 1, "product_specification_id": 5, "quantity": "100"},
            ]}},
            "receipts": {"data": [
                {"items": [{"product_id": 1, "product_specification_id": 5, "quantity": "40"}]},
                {"items": [{"product_id": 1, "product_specification_id": 5, "quantity": "25"}]},
            ]},
        }

        response = await client.post(f"{PREFIX}/fulfillment/remaining", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["purchase_order_id"] == 10
        assert Decimal(data["lines"][0]["quantity"]) == Decimal("35")

    @pytest.mark.asyncio
    async def test_stateless_remaining_with_null_quantity(self, client: AsyncClient):
        payload = {
            "order": [{"product_id": 1, "quantity": "100"}],
            "receipts": [{"items": [{"product_id": 1, "quantity": None}, {"product_id": 1, "quantity": "30"}]}],
        }

        response = await client.post(f"{PREFIX}/fulfillment/remaining", json=payload)

        assert response.status_code == 200
        assert Decimal(response.json()["lines"][0]["quantity"]) == Decimal("70")

    @pytest.mark.asyncio
    async def test_stateless_remaining_bad_record(self, client: AsyncClient):
        response = await client.post(
            f"{PREFIX}/fulfillment/remaining", json={"order": "not a record"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_download_pdf(self, client: AsyncClient):
        order = (await client.post(f"{PREFIX}/documents", json=order_payload())).json()

        response = await client.get(f"{PREFIX}/documents/{order['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_delete_document(self, client: AsyncClient):
        order = (await client.post(f"{PREFIX}/documents", json=order_payload())).json()

        deleted = await client.delete(f"{PREFIX}/documents/{order['id']}")
        missing = await client.get(f"{PREFIX}/documents/{order['id']}")

        assert deleted.status_code == 204
        assert missing.status_code == 404
