"""
Storage interface shared by the in-memory and SQL backends.

The pipeline and the response generator only ever see this interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from bizassist.models.catalog import Order, OrderCreate, Product, ProductCreate
from bizassist.models.chat import Conversation, Message
from bizassist.utils.errors import ValidationError


class Storage(ABC):
    """Catalog, order and conversation storage"""

    # Catalog / order lookup

    @abstractmethod
    def get_products(self) -> List[Product]:
        ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        ...

    @abstractmethod
    def search_products(self, query: str) -> List[Product]:
        """Case-insensitive substring match over name, SKU and description."""

    @abstractmethod
    def get_products_by_category(self, category: str) -> List[Product]:
        """Case-insensitive category equality."""

    @abstractmethod
    def create_product(self, product: ProductCreate) -> Product:
        """Raises ConflictError when the SKU is already taken."""

    @abstractmethod
    def update_product(self, product_id: int, **fields) -> Optional[Product]:
        ...

    @abstractmethod
    def adjust_stock(self, product_id: int, delta: int) -> Optional[Product]:
        """
        Add delta to the stock level in one atomic step, clamping at zero and
        recomputing the status against the reorder point.
        """

    @abstractmethod
    def delete_product(self, product_id: int) -> bool:
        ...

    @abstractmethod
    def get_orders(self) -> List[Order]:
        ...

    @abstractmethod
    def get_recent_orders(self, limit: int) -> List[Order]:
        ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]:
        ...

    @abstractmethod
    def get_order_by_number(self, order_number: str) -> Optional[Order]:
        ...

    @abstractmethod
    def create_order(self, order: OrderCreate) -> Order:
        """Raises ConflictError when the order number is already taken."""

    @abstractmethod
    def update_order(self, order_id: int, **fields) -> Optional[Order]:
        ...

    # Conversations

    @abstractmethod
    def get_conversations(self) -> List[Conversation]:
        ...

    @abstractmethod
    def get_active_conversations(self) -> List[Conversation]:
        ...

    @abstractmethod
    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        ...

    @abstractmethod
    def create_conversation(
        self,
        user_id: Optional[int],
        intent: Optional[str],
        messages: Sequence[Message],
        active: bool = True,
    ) -> Conversation:
        ...

    @abstractmethod
    def update_conversation(self, conversation_id: int, **fields) -> Optional[Conversation]:
        """Update conversation metadata. The transcript is not editable here."""

    @abstractmethod
    def add_message_to_conversation(self, conversation_id: int, message: Message) -> Optional[Conversation]:
        """
        Append one message atomically.

        Returns the updated conversation, or None when the id is unknown.
        """

    def seed(self, products: Sequence[ProductCreate], orders: Sequence[OrderCreate]) -> int:
        """Insert products and orders whose SKU / order number is not present yet."""
        added = 0
        for product in products:
            if self.get_product_by_sku(product.sku) is None:
                self.create_product(product)
                added += 1
        for order in orders:
            if self.get_order_by_number(order.order_number) is None:
                self.create_order(order)
                added += 1
        return added


CONVERSATION_UPDATABLE_FIELDS = frozenset({"user_id", "intent", "active"})


def validate_message(message) -> Message:
    """Coerce a Message or message dict, rejecting anything that is not a valid message."""
    try:
        return Message.model_validate(message)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid message: {e}") from e


def check_conversation_fields(fields) -> None:
    unknown = set(fields) - CONVERSATION_UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Cannot update conversation fields: {sorted(unknown)}")
