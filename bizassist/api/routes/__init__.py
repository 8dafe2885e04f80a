"""
API routers
"""

from bizassist.api.routes import analytics, chat, conversations, inventory, orders

__all__ = ["analytics", "chat", "conversations", "inventory", "orders"]
