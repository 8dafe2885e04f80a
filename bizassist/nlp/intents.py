"""
Intent taxonomy - trigger phrases for the rule-based classifier.

Order matters: when two intents score the same, the one listed first wins.
"""

from typing import Tuple

from bizassist.models.chat import IntentName

IntentPatterns = Tuple[Tuple[IntentName, Tuple[str, ...]], ...]

INTENT_PATTERNS: IntentPatterns = (
    (IntentName.GREETING, (
        "hello", "hi", "hey", "good morning", "good afternoon", "good evening", "howdy",
    )),
    (IntentName.INVENTORY_CHECK, (
        "check inventory", "check stock", "do you have", "how many", "in stock", "available",
        "check for", "stock level", "stock status",
    )),
    (IntentName.INVENTORY_RESTOCK, (
        "restock", "when will", "back in stock", "get more", "next shipment", "restocking",
        "replenish", "new stock", "availability date", "when can i get",
    )),
    (IntentName.ORDER_STATUS, (
        "order status", "track order", "where is my order", "shipping status", "delivery status",
        "order #", "order number", "has my order shipped",
    )),
    (IntentName.ORDER_PLACEMENT, (
        "place order", "buy", "purchase", "add to cart", "checkout", "ordering", "want to order",
    )),
    (IntentName.PRODUCT_INQUIRY, (
        "product details", "tell me about", "features", "specifications", "compare", "difference between",
        "product information", "what is", "how does", "description",
    )),
    (IntentName.RETURNS_REFUNDS, (
        "return", "refund", "money back", "exchange", "broken", "damaged", "not working", "defective",
    )),
    (IntentName.HELP, (
        "help", "assist", "support", "guide", "how do i", "can you help", "need assistance",
    )),
    (IntentName.GOODBYE, (
        "goodbye", "bye", "see you", "thanks", "thank you", "that's all", "exit", "quit",
    )),
    (IntentName.GENERAL_INQUIRY, (
        "what can you do", "capabilities", "features", "ability",
    )),
)

# Human-readable labels used by analytics and the dashboard
INTENT_DESCRIPTIONS = {
    IntentName.GREETING: "Greeting",
    IntentName.INVENTORY_CHECK: "Inventory Check",
    IntentName.INVENTORY_RESTOCK: "Inventory Restock",
    IntentName.ORDER_STATUS: "Order Status",
    IntentName.ORDER_PLACEMENT: "Order Placement",
    IntentName.PRODUCT_INQUIRY: "Product Inquiry",
    IntentName.RETURNS_REFUNDS: "Returns & Refunds",
    IntentName.GENERAL_INQUIRY: "General Inquiry",
    IntentName.HELP: "Help Request",
    IntentName.GOODBYE: "Farewell",
}
