"""
Tests for the inventory, order and analytics services and the demo order generator
"""

import random
import threading
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bizassist.agents.pipeline import ChatPipeline
from bizassist.models.catalog import OrderCreate, OrderItem, OrderStatus, ProductStatus, ProductUpdate
from bizassist.services import AnalyticsService, InventoryService, OrderService, stock_status
from bizassist.services.mock_data import generate_orders


@pytest.fixture
def inventory(storage):
    return InventoryService(storage)


@pytest.fixture
def orders(storage, inventory):
    return OrderService(storage, inventory)


@pytest.mark.parametrize("quantity, reorder_point, expected", [
    (0, 5, ProductStatus.OUT_OF_STOCK),
    (-2, 5, ProductStatus.OUT_OF_STOCK),
    (5, 5, ProductStatus.LOW_STOCK),
    (1, 5, ProductStatus.LOW_STOCK),
    (6, 5, ProductStatus.IN_STOCK),
    (1, 0, ProductStatus.IN_STOCK),
])
def test_stock_status(quantity, reorder_point, expected):
    assert stock_status(quantity, reorder_point) == expected


class TestInventoryService:
    def test_summary(self, inventory):
        summary = inventory.get_inventory_summary()
        assert summary.total_products == 3
        assert (summary.in_stock, summary.low_stock, summary.out_of_stock) == (1, 1, 1)
        assert summary.average_stock == pytest.approx(9.0)

    def test_low_stock_includes_out_of_stock(self, inventory):
        assert sorted(p.sku for p in inventory.get_low_stock_products()) == ["WH-APM-200", "WH-BBE-300"]

    def test_update_stock_recomputes_status(self, inventory, storage):
        product = storage.get_product_by_sku("WH-SWP-100")

        low = inventory.update_stock(product.id, -16)
        assert low.quantity == 8
        assert low.status == ProductStatus.LOW_STOCK

        out = inventory.update_stock(product.id, -100)
        assert out.quantity == 0
        assert out.status == ProductStatus.OUT_OF_STOCK

        back = inventory.update_stock(product.id, 30)
        assert back.status == ProductStatus.IN_STOCK

    def test_update_stock_unknown_product(self, inventory):
        assert inventory.update_stock(999, 1) is None

    def test_partial_update(self, inventory, storage):
        product = storage.get_product_by_sku("WH-APM-200")
        updated = inventory.update_product(product.id, ProductUpdate(price=Decimal("79.99")))

        assert updated.price == Decimal("79.99")
        assert updated.name == "AudioPeak Max"
        assert updated.quantity == 3

    def test_restock_date_update(self, inventory, storage):
        product = storage.get_product_by_sku("WH-APM-200")
        when = datetime(2030, 1, 6, tzinfo=timezone.utc)
        assert inventory.update_product(product.id, ProductUpdate(next_restock=when)).next_restock == when

    def test_concurrent_stock_updates(self, inventory, storage):
        product = storage.get_product_by_sku("WH-SWP-100")

        def sell():
            for _ in range(5):
                inventory.update_stock(product.id, -1)

        threads = [threading.Thread(target=sell) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        updated = storage.get_product(product.id)
        assert updated.quantity == 4
        assert updated.status == ProductStatus.LOW_STOCK


class TestOrderService:
    def test_summary(self, orders):
        summary = orders.get_orders_summary()
        assert summary.total_orders == 3
        assert summary.completed_orders == 1
        assert summary.processing_orders == 1
        assert summary.shipped_orders == 1
        assert summary.pending_orders == 0
        assert summary.total_value == Decimal("460.44")
        assert summary.average_value == Decimal("153.48")

    def test_create_order_draws_down_stock(self, orders, storage):
        product = storage.get_product_by_sku("WH-SWP-100")
        order = orders.create_order(OrderCreate(
            order_number="40001",
            total=Decimal("259.98"),
            items=[OrderItem(product_id=product.id, quantity=2, price=product.price)],
        ))

        assert order.status == "pending"
        assert storage.get_product(product.id).quantity == 22

    def test_update_status(self, orders, storage):
        order = storage.get_order_by_number("38290")
        assert orders.update_order_status(order.id, OrderStatus.CANCELLED).status == "cancelled"

    def test_todays_orders(self, orders):
        today = orders.get_todays_orders()
        assert today.count == 3
        assert today.total_value == Decimal("460.44")

        tomorrow = orders.get_todays_orders(now=datetime.now(timezone.utc) + timedelta(days=1))
        assert tomorrow.count == 0
        assert tomorrow.average_value == Decimal("0.00")

    def test_recent_orders_limit(self, orders):
        assert len(orders.get_recent_orders(limit=2)) == 2


class TestAnalyticsService:
    def test_empty(self, storage):
        snapshot = AnalyticsService(storage).get_snapshot()
        assert snapshot.total_conversations == 0
        assert snapshot.intent_counts["greeting"] == 0
        assert len(snapshot.intent_counts) == 10

    def test_counts_user_intents(self, storage):
        pipeline = ChatPipeline(storage, rng=random.Random(0))
        first = pipeline.process("hello")
        pipeline.process("what's the status of order #38291", conversation_id=first.conversation_id)
        pipeline.process("hi there")
        storage.update_conversation(first.conversation_id, active=False)

        snapshot = AnalyticsService(storage).get_snapshot()
        assert snapshot.total_conversations == 2
        assert snapshot.active_conversations == 1
        assert snapshot.completed_conversations == 1
        assert snapshot.total_user_messages == 3
        assert snapshot.intent_counts["greeting"] == 2
        assert snapshot.intent_counts["order_status"] == 1


class TestGenerateOrders:
    def test_seeded_output_is_reproducible(self, storage):
        products = storage.get_products()
        assert generate_orders(products, count=5, seed=42) == generate_orders(products, count=5, seed=42)

    def test_orders_are_consistent(self, storage):
        products = storage.get_products()
        generated = generate_orders(products, count=20, seed=1, existing_numbers=["38291"])

        numbers = [o.order_number for o in generated]
        assert len(set(numbers)) == 20
        assert "38291" not in numbers
        product_ids = {p.id for p in products}
        for order in generated:
            assert 40000 <= int(order.order_number) <= 99999
            assert 1 <= len(order.items) <= 3
            assert {item.product_id for item in order.items} <= product_ids
            assert order.total == sum(item.price * item.quantity for item in order.items)

    def test_requires_products(self):
        with pytest.raises(ValueError):
            generate_orders([], count=1)
