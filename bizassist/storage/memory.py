"""
In-memory storage backend for development and tests.

Entities live in dicts keyed by integer ids handed out by monotonically
increasing counters. A single re-entrant lock serializes writes.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from loguru import logger

from bizassist.models.catalog import Order, OrderCreate, Product, ProductCreate, stock_status
from bizassist.models.chat import Conversation, Message
from bizassist.storage.base import Storage, check_conversation_fields, validate_message
from bizassist.utils.errors import ConflictError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemStorage(Storage):
    """Dict-backed implementation of the Storage interface"""

    def __init__(self):
        self._lock = threading.RLock()
        self._products: Dict[int, Product] = {}
        self._orders: Dict[int, Order] = {}
        self._conversations: Dict[int, Conversation] = {}
        self._next_product_id = 1
        self._next_order_id = 1
        self._next_conversation_id = 1

    # Products

    def get_products(self) -> List[Product]:
        return list(self._products.values())

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._products.get(product_id)

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        return next((p for p in self._products.values() if p.sku == sku), None)

    def search_products(self, query: str) -> List[Product]:
        needle = query.lower()
        return [
            p for p in self._products.values()
            if needle in p.name.lower()
            or needle in p.sku.lower()
            or (p.description is not None and needle in p.description.lower())
        ]

    def get_products_by_category(self, category: str) -> List[Product]:
        wanted = category.lower()
        return [p for p in self._products.values() if p.category and p.category.lower() == wanted]

    def create_product(self, product: ProductCreate) -> Product:
        with self._lock:
            if self.get_product_by_sku(product.sku) is not None:
                raise ConflictError(f"Product with SKU {product.sku} already exists")
            product_id = self._next_product_id
            self._next_product_id += 1
            now = _utcnow()
            created = Product(id=product_id, created_at=now, updated_at=now, **product.model_dump())
            self._products[product_id] = created
            return created

    def update_product(self, product_id: int, **fields) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                return None
            updated = product.model_copy(update={**fields, "updated_at": _utcnow()})
            self._products[product_id] = updated
            return updated

    def adjust_stock(self, product_id: int, delta: int) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            if product is None:
                return None
            quantity = max(product.quantity + delta, 0)
            return self.update_product(
                product_id, quantity=quantity, status=stock_status(quantity, product.reorder_point)
            )

    def delete_product(self, product_id: int) -> bool:
        with self._lock:
            return self._products.pop(product_id, None) is not None

    # Orders

    def get_orders(self) -> List[Order]:
        return list(self._orders.values())

    def get_recent_orders(self, limit: int) -> List[Order]:
        return sorted(self._orders.values(), key=lambda o: (o.created_at, o.id), reverse=True)[:limit]

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._orders.get(order_id)

    def get_order_by_number(self, order_number: str) -> Optional[Order]:
        return next((o for o in self._orders.values() if o.order_number == order_number), None)

    def create_order(self, order: OrderCreate) -> Order:
        with self._lock:
            if self.get_order_by_number(order.order_number) is not None:
                raise ConflictError(f"Order {order.order_number} already exists")
            order_id = self._next_order_id
            self._next_order_id += 1
            now = _utcnow()
            data = order.model_dump()
            data["status"] = order.status.value
            created = Order(id=order_id, created_at=now, updated_at=now, **data)
            self._orders[order_id] = created
            return created

    def update_order(self, order_id: int, **fields) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
            if order is None:
                return None
            updated = order.model_copy(update={**fields, "updated_at": _utcnow()})
            self._orders[order_id] = updated
            return updated

    # Conversations

    def get_conversations(self) -> List[Conversation]:
        return list(self._conversations.values())

    def get_active_conversations(self) -> List[Conversation]:
        return [c for c in self._conversations.values() if c.active]

    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        return self._conversations.get(conversation_id)

    def create_conversation(
        self,
        user_id: Optional[int],
        intent: Optional[str],
        messages: Sequence[Message],
        active: bool = True,
    ) -> Conversation:
        with self._lock:
            conversation_id = self._next_conversation_id
            self._next_conversation_id += 1
            now = _utcnow()
            conversation = Conversation(
                id=conversation_id,
                user_id=user_id,
                intent=intent,
                messages=[validate_message(m) for m in messages],
                active=active,
                created_at=now,
                updated_at=now,
            )
            self._conversations[conversation_id] = conversation
            logger.debug(f"Created conversation {conversation_id} with {len(messages)} messages")
            return conversation

    def update_conversation(self, conversation_id: int, **fields) -> Optional[Conversation]:
        check_conversation_fields(fields)
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None
            updated = conversation.model_copy(update={**fields, "updated_at": _utcnow()})
            self._conversations[conversation_id] = updated
            return updated

    def add_message_to_conversation(self, conversation_id: int, message: Message) -> Optional[Conversation]:
        validated = validate_message(message)
        with self._lock:
            conversation = self._conversations.get(conversation_id)
            if conversation is None:
                return None
            updated = conversation.model_copy(update={
                "messages": [*conversation.messages, validated],
                "updated_at": _utcnow(),
            })
            self._conversations[conversation_id] = updated
            return updated
