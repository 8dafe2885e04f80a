"""
Chat pipeline - LangGraph workflow for message understanding and replies
"""

from bizassist.agents.pipeline.agent import ChatPipeline, coerce_conversation_id
from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.state import ChatResult, PipelineState

__all__ = [
    "ChatPipeline",
    "ChatResult",
    "PipelineContext",
    "PipelineState",
    "coerce_conversation_id",
]
