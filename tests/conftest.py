"""
Shared fixtures: seeded in-memory storage, deterministic randomness and
stand-in chat models for the hosted path.
"""

import random
from unittest.mock import MagicMock

import pytest
from langchain_core.language_models import FakeListChatModel

from bizassist.agents.pipeline import ChatPipeline
from bizassist.nlp.entity_extractor import EntityExtractor
from bizassist.nlp.hosted_model import HostedModelClient
from bizassist.nlp.intent_classifier import IntentClassifier
from bizassist.nlp.response_generator import ResponseGenerator
from bizassist.storage import SAMPLE_ORDERS, MemStorage, sample_products


@pytest.fixture
def storage():
    """MemStorage holding the three sample products and three sample orders"""
    store = MemStorage()
    store.seed(sample_products(), SAMPLE_ORDERS)
    return store


@pytest.fixture
def rng():
    return random.Random(0)


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.fixture
def extractor():
    return EntityExtractor()


@pytest.fixture
def generator(storage, rng):
    return ResponseGenerator(storage, rng=rng)


@pytest.fixture
def rule_pipeline(storage):
    """Pipeline with no hosted model: every message takes the rule-based path"""
    return ChatPipeline(storage, rng=random.Random(0))


def fake_hosted(*responses: str) -> HostedModelClient:
    """Hosted client whose model replies with the given texts in order"""
    return HostedModelClient(FakeListChatModel(responses=list(responses)))


def scripted_hosted(*outcomes) -> HostedModelClient:
    """
    Hosted client over a mock model.

    Each outcome is either a reply message or an exception to raise, consumed
    one per model call.
    """
    llm = MagicMock()
    llm.invoke.side_effect = list(outcomes)
    return HostedModelClient(llm)


@pytest.fixture
def failing_llm():
    llm = MagicMock()
    llm.invoke.side_effect = RuntimeError("connection reset by peer")
    return llm
