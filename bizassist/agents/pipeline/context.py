"""
Pipeline context - dependencies passed to workflow nodes
"""

from dataclasses import dataclass
from typing import Optional

from bizassist.nlp.entity_extractor import EntityExtractor
from bizassist.nlp.hosted_model import HostedModelClient
from bizassist.nlp.intent_classifier import IntentClassifier
from bizassist.nlp.response_generator import ResponseGenerator
from bizassist.storage.base import Storage


@dataclass
class PipelineContext:
    """Context holding dependencies for pipeline nodes"""

    storage: Storage
    classifier: IntentClassifier
    extractor: EntityExtractor
    generator: ResponseGenerator
    hosted: Optional[HostedModelClient] = None  # None: every message takes the rule-based path
