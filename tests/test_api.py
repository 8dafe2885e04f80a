"""
API tests using FastAPI's TestClient over a seeded in-memory store
"""

import random
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from bizassist.agents.pipeline import ChatPipeline
from bizassist.api.app import create_app
from bizassist.api.schemas.chat import MAX_MESSAGE_LENGTH
from bizassist.utils.errors import StorageError


@pytest.fixture
def client(storage):
    app = create_app(storage=storage, pipeline=ChatPipeline(storage, rng=random.Random(0)))
    return TestClient(app)


class TestChat:
    def test_new_conversation(self, client):
        response = client.post("/api/chat", json={"message": "do you have SAM-GA14-KE in stock"})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"message", "intent", "entities", "conversationId"}
        assert body["conversationId"] == 1
        assert body["message"]["sender"] == "bot"
        assert body["intent"]["name"] == "inventory_check"
        assert {"entity": "sku", "value": "SAM-GA14-KE"} in body["entities"]

    def test_follow_up_keeps_conversation(self, client):
        first = client.post("/api/chat", json={"message": "hello"}).json()
        second = client.post(
            "/api/chat",
            json={"message": "what's the status of order #38291", "conversationId": str(first["conversationId"])},
        )

        assert second.status_code == 200
        assert second.json()["conversationId"] == first["conversationId"]

        conversation = client.get(f"/api/conversations/{first['conversationId']}").json()
        assert len(conversation["messages"]) == 4
        assert conversation["intent"] == "order_status"

    @pytest.mark.parametrize("payload", [
        {},
        {"message": ""},
        {"message": "x" * (MAX_MESSAGE_LENGTH + 1)},
        {"message": 42},
    ])
    def test_invalid_requests(self, client, payload):
        response = client.post("/api/chat", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_malformed_json(self, client):
        response = client.post("/api/chat", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400

    def test_pipeline_failure_hides_details(self, storage):
        pipeline = MagicMock()
        pipeline.process.side_effect = StorageError("database is locked at /var/lib/secret.db")
        client = TestClient(create_app(storage=storage, pipeline=pipeline))

        response = client.post("/api/chat", json={"message": "hello"})

        assert response.status_code == 500
        assert response.json() == {"error": "Error processing request"}
        assert "secret" not in response.text


class TestConversations:
    def test_unknown_conversation(self, client):
        response = client.get("/api/conversations/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Conversation not found"}

    def test_active_conversations(self, client):
        client.post("/api/chat", json={"message": "hello"})
        client.post("/api/chat", json={"message": "help"})
        conversations = client.get("/api/conversations").json()
        assert [c["id"] for c in conversations] == [1, 2]
        assert conversations[0]["active"] is True


class TestInventory:
    def test_list_and_search(self, client):
        assert len(client.get("/api/inventory").json()) == 3
        results = client.get("/api/inventory", params={"q": "audiopeak"}).json()
        assert [p["sku"] for p in results] == ["WH-APM-200"]
        assert results[0]["reorderPoint"] == 5

    def test_summary(self, client):
        summary = client.get("/api/inventory/summary").json()
        assert summary["totalProducts"] == 3
        assert summary["outOfStock"] == 1

    def test_low_stock(self, client):
        skus = {p["sku"] for p in client.get("/api/inventory/low-stock").json()}
        assert skus == {"WH-APM-200", "WH-BBE-300"}

    def test_create_update_and_adjust(self, client):
        created = client.post("/api/inventory", json={
            "name": "Tecno Spark 10C",
            "sku": "TEC-SP10C-KE",
            "price": "12999.00",
            "quantity": 12,
            "category": "smartphones",
            "reorderPoint": 4,
        })
        assert created.status_code == 201
        product_id = created.json()["id"]

        updated = client.put(f"/api/inventory/{product_id}", json={"price": "11999.00"})
        assert updated.status_code == 200
        assert updated.json()["name"] == "Tecno Spark 10C"

        adjusted = client.post(f"/api/inventory/{product_id}/stock", json={"delta": -9}).json()
        assert adjusted["quantity"] == 3
        assert adjusted["status"] == "low_stock"

        assert client.delete(f"/api/inventory/{product_id}").status_code == 204
        assert client.get(f"/api/inventory/{product_id}").status_code == 404

    def test_duplicate_sku(self, client):
        response = client.post("/api/inventory", json={"name": "Copy", "sku": "WH-SWP-100", "price": "1.00"})
        assert response.status_code == 409
        assert response.json() == {"error": "Product with SKU WH-SWP-100 already exists"}
        assert len(client.get("/api/inventory").json()) == 3

    def test_set_restock_date(self, client):
        product_id = client.get("/api/inventory", params={"q": "WH-APM-200"}).json()[0]["id"]
        updated = client.put(f"/api/inventory/{product_id}", json={"nextRestock": "2030-01-06T00:00:00Z"})
        assert updated.status_code == 200
        assert updated.json()["nextRestock"].startswith("2030-01-06T00:00:00")

    def test_invalid_product(self, client):
        response = client.post("/api/inventory", json={"name": "No SKU", "price": "1.00"})
        assert response.status_code == 400

    def test_update_unknown_product(self, client):
        response = client.put("/api/inventory/999", json={"quantity": 1})
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}


class TestOrders:
    def test_list_and_recent(self, client):
        assert len(client.get("/api/orders").json()) == 3
        assert len(client.get("/api/orders/recent", params={"limit": 2}).json()) == 2
        assert client.get("/api/orders/recent", params={"limit": 0}).status_code == 400

    def test_summary(self, client):
        summary = client.get("/api/orders/summary").json()
        assert summary["totalOrders"] == 3
        assert float(summary["totalValue"]) == pytest.approx(460.44)

    def test_create_and_update_status(self, client):
        created = client.post("/api/orders", json={
            "orderNumber": "40001",
            "total": "129.99",
            "customerName": "Wanjiru Kamau",
            "items": [{"productId": 1, "quantity": 1, "price": "129.99"}],
        })
        assert created.status_code == 201
        order = created.json()
        assert order["status"] == "pending"

        assert client.get("/api/inventory/1").json()["quantity"] == 23

        updated = client.put(f"/api/orders/{order['id']}/status", json={"status": "shipped"})
        assert updated.json()["status"] == "shipped"

    def test_duplicate_order_number(self, client):
        response = client.post("/api/orders", json={"orderNumber": "38291", "total": "1.00"})
        assert response.status_code == 409

    def test_invalid_status(self, client):
        assert client.put("/api/orders/1/status", json={"status": "lost"}).status_code == 400

    def test_unknown_order(self, client):
        assert client.get("/api/orders/999").status_code == 404


def test_analytics(client):
    client.post("/api/chat", json={"message": "hello"})
    snapshot = client.get("/api/analytics").json()
    assert snapshot["totalConversations"] == 1
    assert snapshot["intentCounts"]["greeting"] == 1


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["storage"] == "MemStorage"
    assert body["hosted_model"] is False
