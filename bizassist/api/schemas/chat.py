"""
Chat endpoint request/response models

Wire format is camelCase; the assistant dashboard sends conversationId as
either a number or a string.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bizassist.models.chat import EntityValue, Intent, Message

MAX_MESSAGE_LENGTH = 2000


class ChatRequest(BaseModel):
    """User message sent to the assistant"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"message": "Do you have SAM-GA14-KE in stock?"},
                {"message": "What's the status of order #38291?", "conversationId": 1},
            ]
        },
    )

    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    conversation_id: Optional[Union[int, str]] = None


class ChatResponse(BaseModel):
    """Assistant reply plus the understanding it was based on"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: Message
    intent: Intent
    entities: List[EntityValue] = Field(default_factory=list)
    conversation_id: int


class HealthResponse(BaseModel):
    """
    Health check response

    Attributes:
        status: Service health status
        service: Service name
        version: API version
        storage: Active storage backend
        hosted_model: Whether a hosted model is configured
    """
    status: str
    service: str
    version: str
    storage: str
    hosted_model: bool


class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[str]] = None
