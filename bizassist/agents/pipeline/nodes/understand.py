"""
Understand nodes - hosted intent/entity analysis and its rule-based fallback
"""

from loguru import logger

from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.state import PipelineState
from bizassist.utils.errors import HostedModelError


def understand_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    """Classify and extract with the hosted model; route to the fallback on any failure."""
    state = dict(state)

    if ctx.hosted is None:
        logger.info("No hosted model configured, using rule-based understanding")
        state["next_step"] = "understand_fallback"
        return state

    try:
        intent = ctx.hosted.analyze_intent(state["message"])
        entities = ctx.hosted.extract_entities(state["message"])
    except HostedModelError as e:
        # Partial hosted results are discarded so intent and entities come from one source
        logger.warning(f"Hosted understanding failed, falling back to rule-based: {e}")
        state["next_step"] = "understand_fallback"
        return state

    state["intent"] = intent
    state["entities"] = entities
    state["understanding_path"] = "hosted"
    state["next_step"] = "load_context"
    logger.info(f"Understanding via hosted model: {intent.name.value} ({intent.confidence:.2f})")
    return state


def understand_fallback_node(state: PipelineState, ctx: PipelineContext) -> PipelineState:
    """Recompute both intent and entities deterministically."""
    message = state["message"]
    intent = ctx.classifier.classify(message)
    entities = ctx.extractor.format_entities(ctx.extractor.extract_entities(message))

    state = dict(state)
    state["intent"] = intent
    state["entities"] = entities
    state["understanding_path"] = "fallback"
    state["next_step"] = "load_context"
    logger.info(f"Understanding via rules: {intent.name.value} ({intent.confidence:.2f})")
    return state
