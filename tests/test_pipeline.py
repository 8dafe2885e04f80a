"""
Tests for the chat pipeline workflow: path selection, fallback and persistence
"""

import random
from unittest.mock import MagicMock

import pytest
from langchain_core.messages import AIMessage

from bizassist.agents.pipeline import ChatPipeline, coerce_conversation_id
from bizassist.models.chat import IntentName
from bizassist.nlp.hosted_model import HostedModelClient
from bizassist.utils.errors import HostedModelError, StorageError

from tests.conftest import fake_hosted, scripted_hosted

INVENTORY_QUESTION = "do you have SAM-GA14-KE in stock"


class TestRuleBasedPath:
    def test_first_message_creates_conversation(self, rule_pipeline, storage):
        result = rule_pipeline.process("hello")

        assert result.intent.name == IntentName.GREETING
        assert result.understanding_path == "fallback"
        assert result.response_path == "fallback"
        assert result.message.sender == "bot"
        assert result.message.content in rule_pipeline.ctx.generator.greetings

        conversation = storage.get_conversation(result.conversation_id)
        assert [m.sender for m in conversation.messages] == ["user", "bot"]
        assert conversation.messages[0].content == "hello"
        assert conversation.messages[0].intent == IntentName.GREETING
        assert conversation.intent == "greeting"

    def test_follow_up_appends_and_updates_intent(self, rule_pipeline, storage):
        first = rule_pipeline.process("hello")
        second = rule_pipeline.process("what's the status of order #38291", conversation_id=first.conversation_id)

        assert second.conversation_id == first.conversation_id
        assert second.intent.name == IntentName.ORDER_STATUS
        assert second.message.content.startswith("Order #38291 has been completed.")

        conversation = storage.get_conversation(first.conversation_id)
        assert len(conversation.messages) == 4
        assert conversation.intent == "order_status"

    def test_numeric_string_conversation_id(self, rule_pipeline):
        first = rule_pipeline.process("hello")
        second = rule_pipeline.process("bye", conversation_id=str(first.conversation_id))
        assert second.conversation_id == first.conversation_id

    @pytest.mark.parametrize("conversation_id", [999, "999", "abc", ""])
    def test_unknown_conversation_starts_new_one(self, rule_pipeline, storage, conversation_id):
        result = rule_pipeline.process("hello", conversation_id=conversation_id)
        conversation = storage.get_conversation(result.conversation_id)
        assert len(conversation.messages) == 2
        assert result.conversation_id != 999

    def test_user_message_carries_entities(self, rule_pipeline, storage):
        result = rule_pipeline.process(INVENTORY_QUESTION)
        user_message = storage.get_conversation(result.conversation_id).messages[0]
        assert user_message.entities == result.entities
        assert "SAM-GA14-KE" in [e.value for e in result.entities]

    def test_storage_failure_propagates(self, storage):
        storage.create_conversation = MagicMock(side_effect=StorageError("disk full"))
        pipeline = ChatPipeline(storage, rng=random.Random(0))
        with pytest.raises(StorageError):
            pipeline.process("hello")

    def test_vanished_conversation_is_a_storage_error(self, rule_pipeline, storage):
        first = rule_pipeline.process("hello")
        storage.add_message_to_conversation = MagicMock(return_value=None)
        with pytest.raises(StorageError):
            rule_pipeline.process("bye", conversation_id=first.conversation_id)


class TestHostedPath:
    def test_hosted_understanding_and_reply(self, storage):
        hosted = fake_hosted(
            '{"name": "inventory_check", "confidence": 0.93}',
            '{"entities": [{"entity": "sku", "value": "WH-SWP-100"}]}',
            "Yes, we have 24 SoundWave Pro X in stock.",
        )
        pipeline = ChatPipeline(storage, hosted=hosted, rng=random.Random(0))

        result = pipeline.process("got any WH-SWP-100?")

        assert result.understanding_path == "hosted"
        assert result.response_path == "hosted"
        assert result.intent.confidence == pytest.approx(0.93)
        assert [e.value for e in result.entities] == ["WH-SWP-100"]
        assert result.message.content == "Yes, we have 24 SoundWave Pro X in stock."

    def test_hosted_failure_matches_rule_based_output(self, storage, classifier, extractor, failing_llm):
        pipeline = ChatPipeline(storage, hosted=HostedModelClient(failing_llm), rng=random.Random(0))
        result = pipeline.process(INVENTORY_QUESTION)

        assert result.understanding_path == "fallback"
        assert result.response_path == "fallback"
        assert result.intent == classifier.classify(INVENTORY_QUESTION)
        assert result.entities == extractor.format_entities(extractor.extract_entities(INVENTORY_QUESTION))

    def test_partial_hosted_understanding_is_discarded(self, storage, classifier, extractor):
        """Hosted intent succeeds but entities fail: both come from the rules"""
        hosted = scripted_hosted(
            AIMessage(content='{"name": "product_inquiry", "confidence": 0.99}'),
            HostedModelError("entity call timed out"),
            RuntimeError("reply call failed"),
        )
        pipeline = ChatPipeline(storage, hosted=hosted, rng=random.Random(0))

        result = pipeline.process(INVENTORY_QUESTION)

        assert result.understanding_path == "fallback"
        assert result.intent == classifier.classify(INVENTORY_QUESTION)
        assert result.intent.name == IntentName.INVENTORY_CHECK
        assert result.entities == extractor.format_entities(extractor.extract_entities(INVENTORY_QUESTION))

    def test_reply_failure_falls_back_after_hosted_understanding(self, storage):
        hosted = scripted_hosted(
            AIMessage(content='{"name": "order_status", "confidence": 0.9}'),
            AIMessage(content='{"entities": [{"entity": "order_number", "value": "38290"}]}'),
            RuntimeError("upstream 503"),
        )
        pipeline = ChatPipeline(storage, hosted=hosted, rng=random.Random(0))

        result = pipeline.process("where is order 38290")

        assert result.understanding_path == "hosted"
        assert result.response_path == "fallback"
        assert "Order #38290" in result.message.content
        assert "is currently being processed" in result.message.content

    def test_quota_error_falls_back(self, storage):
        class QuotaError(Exception):
            code = "insufficient_quota"

        llm = MagicMock()
        llm.invoke.side_effect = QuotaError("quota exceeded")
        pipeline = ChatPipeline(storage, hosted=HostedModelClient(llm), rng=random.Random(0))
        result = pipeline.process("hello")

        assert result.understanding_path == "fallback"
        assert result.response_path == "fallback"
        assert result.intent.name == IntentName.GREETING

    def test_hosted_reply_sees_prior_messages(self, storage):
        llm = MagicMock()
        llm.invoke.side_effect = [
            AIMessage(content='{"name": "greeting", "confidence": 0.9}'),
            AIMessage(content='{"entities": []}'),
            AIMessage(content="Hi!"),
            AIMessage(content='{"name": "goodbye", "confidence": 0.9}'),
            AIMessage(content='{"entities": []}'),
            AIMessage(content="Bye!"),
        ]
        pipeline = ChatPipeline(storage, hosted=HostedModelClient(llm), rng=random.Random(0))
        first = pipeline.process("hello")
        pipeline.process("bye now", conversation_id=first.conversation_id)

        reply_prompt = llm.invoke.call_args_list[-1].args[0]
        assert [m.content for m in reply_prompt[1:]] == ["hello", "Hi!", "bye now"]


@pytest.mark.parametrize("value, expected", [
    (None, None),
    (7, 7),
    ("7", 7),
    (" 12 ", 12),
    ("abc", None),
    ("", None),
    ("1.5", None),
    (True, None),
])
def test_coerce_conversation_id(value, expected):
    assert coerce_conversation_id(value) == expected
