"""
Hosted-model client

Thin wrapper over a LangChain chat model for the three hosted capabilities:
intent analysis, entity extraction and reply generation. Every failure mode
(transport, quota, malformed payload) surfaces as HostedModelError so the
pipeline can switch to the rule-based path.
"""

from typing import List, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from bizassist.config.settings import settings
from bizassist.llm.response_utils import extract_text_from_response, parse_json_response
from bizassist.models.chat import EntityValue, Intent, Message
from bizassist.nlp.prompts import (
    build_response_system_prompt,
    get_entity_system_prompt,
    get_intent_system_prompt,
)
from bizassist.utils.errors import HostedModelError, HostedModelQuotaError


def is_quota_error(error: Exception) -> bool:
    """True when a provider error means the account is out of quota or rate limited."""
    code = getattr(error, "code", None)
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        nested = body.get("error")
        code = code or body.get("code") or (nested.get("code") if isinstance(nested, dict) else None)
    if code == "insufficient_quota":
        return True
    if getattr(error, "status_code", None) == 429:
        return True
    text = str(error)
    return "insufficient_quota" in text or "429" in text


class HostedModelClient:
    """
    Hosted language model capabilities.

    Each method makes one chat call. Request timeout and retry count are set
    on the underlying model by the LLM factory.
    """

    def __init__(self, llm: BaseChatModel, context_window: Optional[int] = None):
        self.llm = llm
        self.context_window = settings.context_window_messages if context_window is None else context_window

    def analyze_intent(self, text: str) -> Intent:
        response = self._invoke("analyze_intent", [
            SystemMessage(content=get_intent_system_prompt()),
            HumanMessage(content=text),
        ])
        try:
            payload = parse_json_response(response)
            if not isinstance(payload, dict):
                raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
            intent = Intent.model_validate({"name": payload.get("name"), "confidence": payload.get("confidence")})
        except (ValueError, PydanticValidationError) as e:
            raise HostedModelError(f"Invalid intent payload: {e}") from e

        logger.debug(f"Hosted intent: {intent.name.value} ({intent.confidence:.2f})")
        return intent

    def extract_entities(self, text: str) -> List[EntityValue]:
        response = self._invoke("extract_entities", [
            SystemMessage(content=get_entity_system_prompt()),
            HumanMessage(content=text),
        ])
        try:
            payload = parse_json_response(response)
            if isinstance(payload, dict):
                payload = payload.get("entities", [])
            if not isinstance(payload, list):
                raise ValueError(f"Expected a list of entities, got {type(payload).__name__}")
            entities = [EntityValue.model_validate(item) for item in payload]
        except (ValueError, PydanticValidationError) as e:
            raise HostedModelError(f"Invalid entity payload: {e}") from e

        logger.debug(f"Hosted entities: {[(e.entity.value, e.value) for e in entities]}")
        return entities

    def generate_response(
        self,
        intent: Intent,
        entities: Sequence[EntityValue],
        context_messages: Sequence[Message],
        current_message: Optional[str] = None,
    ) -> str:
        messages: List[BaseMessage] = [SystemMessage(content=build_response_system_prompt(intent, list(entities)))]

        recent = list(context_messages)[-self.context_window:] if self.context_window > 0 else []
        for msg in recent:
            if msg.sender == "user":
                messages.append(HumanMessage(content=msg.content or ""))
            else:
                messages.append(AIMessage(content=msg.content or ""))
        if current_message is not None:
            messages.append(HumanMessage(content=current_message))

        response = self._invoke("generate_response", messages)
        text = extract_text_from_response(response).strip()
        if not text:
            raise HostedModelError("Hosted model returned an empty reply")
        return text

    def _invoke(self, operation: str, messages: List[BaseMessage]):
        try:
            return self.llm.invoke(messages)
        except Exception as e:
            if is_quota_error(e):
                logger.error(f"Hosted model quota exceeded during {operation}: {e}")
                raise HostedModelQuotaError(str(e)) from e
            raise HostedModelError(f"{operation} failed: {e}") from e
