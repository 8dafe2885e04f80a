"""
Rule-based response generator

One handler per intent, each reading the catalog through the storage
interface. Used whenever the hosted model cannot produce a reply.
"""

import random
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from bizassist.config.settings import Settings, settings as default_settings
from bizassist.models.catalog import Order, Product, ProductStatus
from bizassist.models.chat import EntityType, EntityValue, Intent, IntentName, Message
from bizassist.storage.base import Storage

ORDER_STATUS_PHRASES = {
    "pending": "has been received and is pending processing",
    "processing": "is currently being processed",
    "completed": "has been completed",
    "shipped": "has been shipped and is on its way to you",
    "cancelled": "has been cancelled",
}
DEFAULT_ORDER_STATUS_PHRASE = "is being processed"

RETURNS_POLICY = (
    "Our return policy allows returns within 30 days of purchase with the original receipt. "
    "To initiate a return or request a refund, please provide your order number and the reason for the return."
)

HELP_TEXT = (
    "I can assist you with various business tasks. Here are some things you can ask me:\n\n"
    "- Check inventory for specific products\n"
    "- Get information about product restocking\n"
    "- Check the status of an order\n"
    "- Get detailed product information\n"
    "- Learn about our return and refund policies\n\n"
    "How can I help you today?"
)


def _first(entities: Sequence[EntityValue], entity_type: EntityType) -> Optional[EntityValue]:
    return next((e for e in entities if e.entity == entity_type), None)


def format_restock_date(value: datetime) -> str:
    """Weekday, abbreviated month and day, e.g. 'Monday, Oct 20'."""
    return f"{value:%A}, {value:%b} {value.day}"


def format_short_date(value: datetime) -> str:
    """Month/day/year without padding, e.g. '10/5/2024'."""
    return f"{value.month}/{value.day}/{value.year}"


class ResponseGenerator:
    """
    Deterministic per-intent replies.

    The random source only picks among fixed greeting and farewell texts;
    pass a seeded random.Random to get reproducible output.
    """

    def __init__(
        self,
        catalog: Storage,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ):
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.settings = settings or default_settings

        name = self.settings.system_name
        self.greetings = (
            f"Hello! I'm your {name}. How can I help you today?",
            "Hi there! I'm ready to assist with inventory management, customer support, and sales. What do you need?",
            "Welcome! How may I assist you with your business needs today?",
        )
        self.goodbyes = (
            f"Thank you for using {name}. Have a great day!",
            "Goodbye! Feel free to return if you need any more assistance.",
            "Thanks for chatting. I'm here whenever you need help with your business needs.",
        )

        self._handlers: Dict[IntentName, Callable[[List[EntityValue]], str]] = {
            IntentName.GREETING: self.handle_greeting,
            IntentName.INVENTORY_CHECK: self.handle_inventory_check,
            IntentName.INVENTORY_RESTOCK: self.handle_inventory_restock,
            IntentName.ORDER_STATUS: self.handle_order_status,
            IntentName.ORDER_PLACEMENT: self.handle_general_inquiry,
            IntentName.PRODUCT_INQUIRY: self.handle_product_inquiry,
            IntentName.RETURNS_REFUNDS: self.handle_returns_refunds,
            IntentName.GENERAL_INQUIRY: self.handle_general_inquiry,
            IntentName.HELP: self.handle_help,
            IntentName.GOODBYE: self.handle_goodbye,
        }
        missing = set(IntentName) - set(self._handlers)
        if missing:
            raise ValueError(f"No response handler for intents: {sorted(m.value for m in missing)}")

    def generate_response(
        self,
        intent: Intent,
        entities: Sequence[EntityValue],
        context_messages: Sequence[Message] = (),
    ) -> str:
        # Rule-based replies do not use conversation context
        handler = self._handlers[intent.name]
        logger.debug(f"Rule-based response for intent {intent.name.value} with {len(entities)} entities")
        return handler(list(entities))

    # Formatting helpers

    def format_price(self, amount) -> str:
        return f"{self.settings.currency_symbol}{amount:.2f}"

    @staticmethod
    def status_line(product: Product) -> str:
        if product.status == ProductStatus.IN_STOCK:
            return f"In Stock: {product.quantity}"
        if product.status == ProductStatus.LOW_STOCK:
            return f"Low Stock: {product.quantity}"
        return "Out of Stock"

    def format_products_html(self, products: Sequence[Product]) -> str:
        status_classes = {
            ProductStatus.IN_STOCK: "text-green-600",
            ProductStatus.LOW_STOCK: "text-amber-600",
        }
        blocks = []
        for product in products:
            status_class = status_classes.get(product.status, "text-red-600")
            blocks.append(
                '<div class="bg-white p-2 rounded border border-gray-200">\n'
                '  <div class="flex justify-between">\n'
                f'    <span class="font-medium text-sm">{product.name}</span>\n'
                f'    <span class="{status_class} text-sm">{self.status_line(product)}</span>\n'
                "  </div>\n"
                f'  <p class="text-xs text-gray-500">SKU: {product.sku}</p>\n'
                "</div>"
            )
        return "\n".join(blocks)

    def _find_product(self, entities: Sequence[EntityValue]) -> Optional[Product]:
        """SKU lookup first, then the first name-search hit."""
        sku = _first(entities, EntityType.SKU)
        if sku is not None:
            return self.catalog.get_product_by_sku(sku.value.upper())
        product = _first(entities, EntityType.PRODUCT)
        if product is not None:
            matches = self.catalog.search_products(product.value)
            return matches[0] if matches else None
        return None

    # Intent handlers

    def handle_greeting(self, entities: List[EntityValue]) -> str:
        return self.rng.choice(self.greetings)

    def handle_inventory_check(self, entities: List[EntityValue]) -> str:
        sku = _first(entities, EntityType.SKU)
        product = _first(entities, EntityType.PRODUCT)
        category = _first(entities, EntityType.CATEGORY)

        search_term: Optional[str] = None
        if sku is not None:
            search_term = sku.value
            match = self.catalog.get_product_by_sku(sku.value.upper())
            products = [match] if match else []
        elif product is not None:
            search_term = product.value
            products = self.catalog.search_products(product.value)
        elif category is not None:
            search_term = category.value
            products = self.catalog.get_products_by_category(category.value)
        else:
            products = self.catalog.get_products()

        if not products:
            if search_term is None:
                return "I couldn't find any products in our inventory right now. Please check back later."
            return (
                f'I couldn\'t find any products matching "{search_term}". '
                "Could you provide more details or check the spelling?"
            )

        noun = "product" if len(products) == 1 else "products"
        return (
            f"I found {len(products)} {noun} in our inventory:\n\n"
            f'<div class="mt-3 space-y-2">\n{self.format_products_html(products)}\n</div>\n\n'
            "Would you like to place an order or get more information about any of these products?"
        )

    def handle_inventory_restock(self, entities: List[EntityValue]) -> str:
        product = self._find_product(entities)
        if product is None:
            return "I couldn't find the specific product you're asking about. Could you provide the product name or SKU?"

        if product.status != ProductStatus.OUT_OF_STOCK:
            level = "in stock" if product.status == ProductStatus.IN_STOCK else "low in stock"
            return (
                f"{product.name} ({product.sku}) is currently {level} with {product.quantity} units available. "
                "No restock is currently scheduled."
            )

        if product.next_restock is not None:
            return (
                f"I checked our system and the {product.name} ({product.sku}) is scheduled to be back in stock by "
                f"{format_restock_date(product.next_restock)}. "
                f"We'll be receiving a shipment of {self.settings.restock_incoming_units} units.\n\n"
                "Would you like me to notify you when they're available?"
            )
        return (
            f"{product.name} ({product.sku}) is currently out of stock. "
            "Unfortunately, we don't have a confirmed restock date yet. "
            "Would you like me to notify you when we have more information?"
        )

    def handle_order_status(self, entities: List[EntityValue]) -> str:
        order_number = _first(entities, EntityType.ORDER_NUMBER)
        if order_number is None:
            return (
                "To check an order status, please provide your order number. "
                "For example, 'What's the status of order #38291?'"
            )

        order: Optional[Order] = self.catalog.get_order_by_number(order_number.value)
        if order is None:
            return f"I couldn't find an order with number #{order_number.value}. Please check the number and try again."

        status_phrase = ORDER_STATUS_PHRASES.get(order.status, DEFAULT_ORDER_STATUS_PHRASE)
        return (
            f"Order #{order.order_number} {status_phrase}. "
            f"This order was placed on {format_short_date(order.created_at)} "
            f"with a total of {self.format_price(order.total)}.\n\n"
            "Can I help you with anything else regarding this order?"
        )

    def handle_product_inquiry(self, entities: List[EntityValue]) -> str:
        product = self._find_product(entities)
        if product is None:
            return (
                "I couldn't find specific information about that product. "
                "Could you provide more details or ask about a different product?"
            )

        if product.status == ProductStatus.IN_STOCK:
            availability = f"In stock ({product.quantity} units available)"
        elif product.status == ProductStatus.LOW_STOCK:
            availability = f"Low stock ({product.quantity} units available)"
        else:
            availability = "Out of stock"

        lines = [
            f"Here's information about {product.name} ({product.sku}):",
            "",
            product.description or "No detailed description available.",
            "",
            f"Price: {self.format_price(product.price)}",
            f"Availability: {availability}",
        ]
        if product.status == ProductStatus.OUT_OF_STOCK and product.next_restock is not None:
            lines.append(f"Expected restock: {format_short_date(product.next_restock)}")
        lines += ["", "Would you like to know more or place an order for this product?"]
        return "\n".join(lines)

    def handle_returns_refunds(self, entities: List[EntityValue]) -> str:
        return RETURNS_POLICY

    def handle_help(self, entities: List[EntityValue]) -> str:
        return HELP_TEXT

    def handle_goodbye(self, entities: List[EntityValue]) -> str:
        return self.rng.choice(self.goodbyes)

    def handle_general_inquiry(self, entities: List[EntityValue]) -> str:
        return (
            f"I'm your {self.settings.system_name}, designed to help with inventory management, "
            "customer support, and sales assistance. I can check product availability, provide order "
            "status updates, answer product questions, and much more. "
            "What business task can I help you with today?"
        )
