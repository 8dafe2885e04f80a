"""
Respond nodes - hosted reply generation and its rule-based fallback
"""

from loguru import logger

from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.state import PipelineState
from bizassist.utils.errors import HostedModelError


def respond_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    state = dict(state)

    if ctx.hosted is None:
        state["next_step"] = "respond_fallback"
        return state

    try:
        reply = ctx.hosted.generate_response(
            state["intent"],
            state["entities"],
            state["context_messages"],
            current_message=state["message"],
        )
    except HostedModelError as e:
        logger.warning(f"Hosted reply generation failed, falling back to rule-based: {e}")
        state["next_step"] = "respond_fallback"
        return state

    state["reply"] = reply
    state["response_path"] = "hosted"
    state["next_step"] = "persist"
    logger.info("Reply via hosted model")
    return state


def respond_fallback_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    reply = ctx.generator.generate_response(state["intent"], state["entities"], state["context_messages"])

    state = dict(state)
    state["reply"] = reply
    state["response_path"] = "fallback"
    state["next_step"] = "persist"
    logger.info("Reply via rule-based generator")
    return state
