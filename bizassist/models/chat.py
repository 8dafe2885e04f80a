"""
Chat domain models - intents, entities, messages and conversations.

These are the types that flow through the message-understanding pipeline and
across the conversation store boundary. Wire format is camelCase.
"""

import enum
import uuid
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class IntentName(str, enum.Enum):
    """Closed set of intents the assistant understands."""
    GREETING = "greeting"
    INVENTORY_CHECK = "inventory_check"
    INVENTORY_RESTOCK = "inventory_restock"
    ORDER_STATUS = "order_status"
    ORDER_PLACEMENT = "order_placement"
    PRODUCT_INQUIRY = "product_inquiry"
    RETURNS_REFUNDS = "returns_refunds"
    GENERAL_INQUIRY = "general_inquiry"
    HELP = "help"
    GOODBYE = "goodbye"


class EntityType(str, enum.Enum):
    """Closed set of entity types extracted from messages."""
    PRODUCT = "product"
    QUANTITY = "quantity"
    SKU = "sku"
    DATE = "date"
    ORDER_NUMBER = "order_number"
    CUSTOMER_NAME = "customer_name"
    CATEGORY = "category"


class Intent(BaseModel):
    """Classified intent with a confidence in [0, 1]"""
    name: IntentName
    confidence: float = Field(..., ge=0.0, le=1.0)


class EntityValue(BaseModel):
    """Entity as it crosses into responses and storage (no offsets)"""
    model_config = ConfigDict(frozen=True)

    entity: EntityType
    value: str


class Entity(BaseModel):
    """Entity match with character offsets into the source text"""
    model_config = ConfigDict(frozen=True)

    entity: EntityType
    value: str
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_offsets(self) -> "Entity":
        if self.start > self.end:
            raise ValueError(f"Entity start ({self.start}) is after end ({self.end})")
        return self

    def to_value(self) -> EntityValue:
        return EntityValue(entity=self.entity, value=self.value)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """One chat message; immutable once created"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender: Literal["user", "bot"]
    content: str
    timestamp: datetime = Field(default_factory=_utcnow)
    entities: Optional[List[EntityValue]] = None
    intent: Optional[IntentName] = None


class Conversation(BaseModel):
    """Conversation transcript as owned by the storage collaborator"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    user_id: Optional[int] = None
    intent: Optional[str] = None
    messages: List[Message] = Field(default_factory=list)
    active: bool = True
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
