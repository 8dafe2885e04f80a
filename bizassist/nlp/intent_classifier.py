"""
Rule-based intent classifier

Scores a message against every intent's trigger phrases and picks the best
match. Used whenever the hosted model cannot classify a message.
"""

from typing import Optional

from loguru import logger

from bizassist.config.settings import settings
from bizassist.models.chat import Intent, IntentName
from bizassist.nlp.intents import INTENT_PATTERNS, IntentPatterns


class IntentClassifier:
    """
    Keyword-phrase intent classifier.

    Each intent scores matched_phrases / total_phrases. The strictly highest
    score wins (ties keep the intent listed first). Scores under the threshold
    resolve to general_inquiry at full score, and the reported confidence is
    min(0.5 + score, 1.0), so it always lands in [0.5, 1.0].
    """

    def __init__(self, patterns: IntentPatterns = INTENT_PATTERNS, threshold: Optional[float] = None):
        self.patterns = patterns
        self.threshold = settings.intent_score_threshold if threshold is None else threshold

    def score(self, message: str) -> dict:
        """Per-intent score for a message, in pattern order."""
        normalized = message.lower()
        scores = {}
        for intent, phrases in self.patterns:
            if not phrases:
                scores[intent] = 0.0
                continue
            matches = sum(1 for phrase in phrases if phrase in normalized)
            scores[intent] = matches / len(phrases)
        return scores

    def classify(self, message: str) -> Intent:
        best_intent = IntentName.GENERAL_INQUIRY
        best_score = 0.0

        for intent, score in self.score(message).items():
            if score > best_score:
                best_intent = intent
                best_score = score

        if best_score < self.threshold:
            best_intent = IntentName.GENERAL_INQUIRY
            best_score = 1.0

        confidence = min(0.5 + best_score, 1.0)
        logger.debug(f"Rule-based intent: {best_intent.value} (score={best_score:.3f}, confidence={confidence:.3f})")
        return Intent(name=best_intent, confidence=confidence)
