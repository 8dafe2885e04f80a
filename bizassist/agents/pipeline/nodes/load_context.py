"""
Load-context node - resolves the conversation a message belongs to
"""

from loguru import logger

from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.state import PipelineState


def load_context_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    """Fetch the conversation and its prior messages. Unknown ids start a new conversation."""
    state = dict(state)
    conversation_id = state.get("requested_conversation_id")

    conversation = ctx.storage.get_conversation(conversation_id) if conversation_id is not None else None
    if conversation_id is not None and conversation is None:
        logger.info(f"Conversation {conversation_id} not found, starting a new one")

    state["conversation"] = conversation
    state["context_messages"] = list(conversation.messages) if conversation else []
    state["next_step"] = "respond"
    return state
