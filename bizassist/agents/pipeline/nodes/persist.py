"""
Persist node - appends the exchange to the conversation and builds the result
"""

from loguru import logger

from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.state import ChatResult, PipelineState
from bizassist.models.chat import Message
from bizassist.utils.errors import StorageError


def persist_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    """
    Store the user message and the bot reply.

    A new conversation is created holding both messages. An existing one gets
    two separate appends followed by an intent update; the pair is not atomic,
    so a failure after the first append leaves only the user message stored.
    """
    intent = state["intent"]
    entities = state["entities"]

    user_message = Message(sender="user", content=state["message"], intent=intent.name, entities=entities)
    bot_message = Message(sender="bot", content=state["reply"], intent=intent.name)

    conversation = state.get("conversation")
    if conversation is None:
        conversation = ctx.storage.create_conversation(
            user_id=None,
            intent=intent.name.value,
            messages=[user_message, bot_message],
        )
        logger.info(f"Started conversation {conversation.id}")
    else:
        for message in (user_message, bot_message):
            if ctx.storage.add_message_to_conversation(conversation.id, message) is None:
                raise StorageError(f"Conversation {conversation.id} disappeared while appending messages")
        conversation = ctx.storage.update_conversation(conversation.id, intent=intent.name.value) or conversation

    state = dict(state)
    state["conversation"] = conversation
    state["next_step"] = "done"
    state["result"] = ChatResult(
        message=bot_message,
        intent=intent,
        entities=entities,
        conversation_id=conversation.id,
        understanding_path=state["understanding_path"],
        response_path=state["response_path"],
    )
    return state
