"""
Conversation history endpoints
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from bizassist.api.deps import get_storage
from bizassist.models.chat import Conversation
from bizassist.storage.base import Storage

router = APIRouter(prefix="/api/conversations", tags=["conversations"])


@router.get("", response_model=List[Conversation])
def list_active_conversations(storage: Storage = Depends(get_storage)):
    return storage.get_active_conversations()


@router.get("/{conversation_id}", response_model=Conversation)
def get_conversation(conversation_id: int, storage: Storage = Depends(get_storage)):
    conversation = storage.get_conversation(conversation_id)
    if conversation is None:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation
