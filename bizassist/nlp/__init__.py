"""
NLP layer - rule-based understanding, hosted model client, reply generation
"""

from bizassist.nlp.entity_extractor import EntityExtractor
from bizassist.nlp.hosted_model import HostedModelClient
from bizassist.nlp.intent_classifier import IntentClassifier
from bizassist.nlp.intents import INTENT_DESCRIPTIONS, INTENT_PATTERNS
from bizassist.nlp.response_generator import ResponseGenerator

__all__ = [
    "EntityExtractor",
    "HostedModelClient",
    "IntentClassifier",
    "INTENT_DESCRIPTIONS",
    "INTENT_PATTERNS",
    "ResponseGenerator",
]
