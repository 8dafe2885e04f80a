"""
Chat Pipeline - Main LangGraph workflow

Understands a message (hosted model first, rules on failure), answers it
(hosted model first, rules on failure) and records the exchange.
"""

import random
from typing import Optional, Union

from langgraph.graph import END, StateGraph
from loguru import logger

from bizassist.agents.pipeline.context import PipelineContext
from bizassist.agents.pipeline.nodes import (
    load_context_node,
    persist_node,
    respond_fallback_node,
    respond_node,
    understand_fallback_node,
    understand_node,
)
from bizassist.agents.pipeline.state import ChatResult, PipelineState, initial_state
from bizassist.llm.client import create_hosted_llm
from bizassist.nlp.entity_extractor import EntityExtractor
from bizassist.nlp.hosted_model import HostedModelClient
from bizassist.nlp.intent_classifier import IntentClassifier
from bizassist.nlp.response_generator import ResponseGenerator
from bizassist.storage.base import Storage


def _route_after_understand(state: PipelineState) -> str:
    return "understand_fallback" if state.get("next_step") == "understand_fallback" else "load_context"


def _route_after_respond(state: PipelineState) -> str:
    return "respond_fallback" if state.get("next_step") == "respond_fallback" else "persist"


def coerce_conversation_id(value: Optional[Union[str, int]]) -> Optional[int]:
    """Conversation ids arrive as ints or numeric strings; anything else means 'new conversation'."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    return int(text) if text.isascii() and text.isdigit() else None


class ChatPipeline:
    """
    Per-message workflow.

    Workflow: START → understand → [understand_fallback] → load_context
              → respond → [respond_fallback] → persist → END
    """

    def __init__(
        self,
        storage: Storage,
        classifier: Optional[IntentClassifier] = None,
        extractor: Optional[EntityExtractor] = None,
        generator: Optional[ResponseGenerator] = None,
        hosted: Optional[HostedModelClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.ctx = PipelineContext(
            storage=storage,
            classifier=classifier or IntentClassifier(),
            extractor=extractor or EntityExtractor(),
            generator=generator or ResponseGenerator(storage, rng=rng),
            hosted=hosted,
        )
        self.workflow = self._build_workflow()

        mode = "hosted with rule-based fallback" if hosted else "rule-based only"
        logger.info(f"Initialized ChatPipeline ({mode}, storage={type(storage).__name__})")

    @classmethod
    def from_settings(cls, storage: Storage, rng: Optional[random.Random] = None) -> "ChatPipeline":
        """Build a pipeline with the hosted model configured in settings, if any."""
        llm = create_hosted_llm()
        hosted = HostedModelClient(llm) if llm is not None else None
        return cls(storage, hosted=hosted, rng=rng)

    def _build_workflow(self):
        """Build the LangGraph workflow."""
        ctx = self.ctx
        workflow = StateGraph(PipelineState)

        workflow.add_node("understand", lambda s: understand_node(s, ctx))
        workflow.add_node("understand_fallback", lambda s: understand_fallback_node(s, ctx))
        workflow.add_node("load_context", lambda s: load_context_node(s, ctx))
        workflow.add_node("respond", lambda s: respond_node(s, ctx))
        workflow.add_node("respond_fallback", lambda s: respond_fallback_node(s, ctx))
        workflow.add_node("persist", lambda s: persist_node(s, ctx))

        workflow.set_entry_point("understand")
        workflow.add_conditional_edges(
            "understand",
            _route_after_understand,
            {"understand_fallback": "understand_fallback", "load_context": "load_context"},
        )
        workflow.add_edge("understand_fallback", "load_context")
        workflow.add_edge("load_context", "respond")
        workflow.add_conditional_edges(
            "respond",
            _route_after_respond,
            {"respond_fallback": "respond_fallback", "persist": "persist"},
        )
        workflow.add_edge("respond_fallback", "persist")
        workflow.add_edge("persist", END)

        return workflow.compile()

    def process(self, message: str, conversation_id: Optional[Union[str, int]] = None) -> ChatResult:
        """Process one user message and return the bot reply with its analysis."""
        logger.debug(f"Processing message (conversation={conversation_id!r}): {message[:200]}")
        final_state = self.workflow.invoke(initial_state(message, coerce_conversation_id(conversation_id)))
        result = final_state["result"]
        logger.info(
            f"Conversation {result.conversation_id}: intent={result.intent.name.value} "
            f"understanding={result.understanding_path} response={result.response_path}"
        )
        return result
