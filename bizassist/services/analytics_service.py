"""
Analytics service - intent and conversation statistics from stored transcripts
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Dict

from pydantic import Field

from bizassist.models.catalog import CamelModel
from bizassist.models.chat import IntentName
from bizassist.storage.base import Storage


class AnalyticsSnapshot(CamelModel):
    """Point-in-time conversation statistics"""
    generated_at: datetime
    total_conversations: int
    active_conversations: int
    completed_conversations: int
    total_user_messages: int
    intent_counts: Dict[str, int] = Field(default_factory=dict)


class AnalyticsService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def get_snapshot(self) -> AnalyticsSnapshot:
        conversations = self.storage.get_conversations()

        # Every intent appears, including ones never seen
        counts = Counter({intent.value: 0 for intent in IntentName})
        user_messages = 0
        for conversation in conversations:
            for message in conversation.messages:
                if message.sender != "user":
                    continue
                user_messages += 1
                if message.intent is not None:
                    counts[message.intent.value] += 1

        active = sum(1 for c in conversations if c.active)
        return AnalyticsSnapshot(
            generated_at=datetime.now(timezone.utc),
            total_conversations=len(conversations),
            active_conversations=active,
            completed_conversations=len(conversations) - active,
            total_user_messages=user_messages,
            intent_counts=dict(counts),
        )
