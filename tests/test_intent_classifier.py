"""
Tests for the keyword-phrase intent classifier
"""

import pytest

from bizassist.models.chat import IntentName
from bizassist.nlp.intent_classifier import IntentClassifier
from bizassist.nlp.intents import INTENT_PATTERNS


def test_empty_text_is_general_inquiry(classifier):
    intent = classifier.classify("")
    assert intent.name == IntentName.GENERAL_INQUIRY
    assert intent.confidence == 1.0


def test_greeting(classifier):
    intent = classifier.classify("hello")
    assert intent.name == IntentName.GREETING
    assert intent.confidence == pytest.approx(0.5 + 1 / 7)


def test_inventory_check(classifier):
    intent = classifier.classify("do you have SAM-GA14-KE in stock")
    assert intent.name == IntentName.INVENTORY_CHECK
    assert intent.confidence == pytest.approx(0.5 + 2 / 9)


def test_order_status(classifier):
    intent = classifier.classify("what's the status of order #38291")
    assert intent.name == IntentName.ORDER_STATUS
    assert intent.confidence == pytest.approx(0.625)


def test_no_match_falls_back_to_general_inquiry(classifier):
    intent = classifier.classify("What are your opening hours?")
    assert intent.name == IntentName.GENERAL_INQUIRY
    assert intent.confidence == 1.0


def test_score_at_threshold_is_kept(classifier):
    """One of ten restock phrases scores exactly 0.1, which is not below the threshold"""
    intent = classifier.classify("restock please")
    assert intent.name == IntentName.INVENTORY_RESTOCK
    assert intent.confidence == pytest.approx(0.6)


def test_below_custom_threshold():
    strict = IntentClassifier(threshold=0.5)
    intent = strict.classify("hello")
    assert intent.name == IntentName.GENERAL_INQUIRY
    assert intent.confidence == 1.0


def test_ties_keep_the_earlier_intent():
    patterns = (
        (IntentName.GREETING, ("same",)),
        (IntentName.GOODBYE, ("same",)),
    )
    intent = IntentClassifier(patterns=patterns, threshold=0.1).classify("the same")
    assert intent.name == IntentName.GREETING


def test_case_insensitive(classifier):
    assert classifier.classify("HELLO THERE").name == IntentName.GREETING


def test_score_covers_every_intent(classifier):
    scores = classifier.score("track order please")
    assert set(scores) == {intent for intent, _ in INTENT_PATTERNS}
    assert scores[IntentName.ORDER_STATUS] == pytest.approx(1 / 8)


def test_taxonomy_lists_every_intent_once():
    listed = [intent for intent, _ in INTENT_PATTERNS]
    assert sorted(listed) == sorted(IntentName)
    assert len(listed) == len(set(listed))


@pytest.mark.parametrize("text", [
    "",
    "hello",
    "hi hey hello howdy good morning good afternoon good evening",
    "I want to return a broken, damaged, defective item that is not working for a refund or exchange",
    "asdf qwerty",
    "Where is my order? What's the order status? Has my order shipped?",
])
def test_confidence_range(classifier, text):
    intent = classifier.classify(text)
    assert 0.5 <= intent.confidence <= 1.0
