"""
Pipeline workflow state
"""

from typing import List, Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bizassist.models.chat import Conversation, EntityValue, Intent, Message

Path = Literal["hosted", "fallback"]


class ChatResult(BaseModel):
    """Outcome of processing one user message"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: Message  # The bot reply
    intent: Intent
    entities: List[EntityValue] = Field(default_factory=list)
    conversation_id: int
    understanding_path: Path
    response_path: Path


class PipelineState(TypedDict):
    """State for the per-message workflow"""
    message: str
    requested_conversation_id: Optional[int]
    next_step: str
    intent: Optional[Intent]
    entities: List[EntityValue]
    understanding_path: Optional[Path]
    conversation: Optional[Conversation]  # None until persisted when the conversation is new
    context_messages: List[Message]  # Prior messages, oldest first
    reply: Optional[str]
    response_path: Optional[Path]
    result: Optional[ChatResult]


def initial_state(message: str, conversation_id: Optional[int]) -> PipelineState:
    return {
        "message": message,
        "requested_conversation_id": conversation_id,
        "next_step": "understand",
        "intent": None,
        "entities": [],
        "understanding_path": None,
        "conversation": None,
        "context_messages": [],
        "reply": None,
        "response_path": None,
        "result": None,
    }
