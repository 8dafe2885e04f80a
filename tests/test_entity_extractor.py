"""
Tests for rule-based entity extraction
"""

import pytest

from bizassist.models.chat import EntityType


def _pairs(entities):
    return [(e.entity, e.value) for e in entities]


def test_catalog_sku_with_offsets(extractor):
    """Catalog SKUs like SAM-GA14-KE are found with offsets into the original text"""
    text = "do you have SAM-GA14-KE in stock"
    entities = extractor.extract_entities(text)

    assert _pairs(entities) == [(EntityType.SKU, "SAM-GA14-KE")]
    sku = entities[0]
    assert sku.start == text.index("SAM-GA14-KE")
    assert sku.end == sku.start + len("SAM-GA14-KE")
    assert text[sku.start:sku.end] == "SAM-GA14-KE"


@pytest.mark.parametrize("sku", ["WH-SWP-100", "TEC-SP10C-KE", "OPPO-A58-KE", "ANK-PC20K-KE", "wh-apm-200"])
def test_sku_shapes(extractor, sku):
    values = [e.value for e in extractor.extract_entities(f"info on {sku} please") if e.entity == EntityType.SKU]
    assert values == [sku]


def test_hyphenated_words_are_not_skus(extractor):
    entities = extractor.extract_entities("an all-you-can eat buffet")
    assert not [e for e in entities if e.entity == EntityType.SKU]


def test_unit_quantity_suppresses_bare_numbers(extractor):
    text = "I need 12 units of wireless headphones for store 7"
    entities = extractor.extract_entities(text)

    quantities = [e for e in entities if e.entity == EntityType.QUANTITY]
    assert _pairs(quantities) == [(EntityType.QUANTITY, "12")]
    # Offsets cover the whole "12 units" phrase
    assert text[quantities[0].start:quantities[0].end] == "12 units"


def test_rule_order_and_vocabulary(extractor):
    entities = extractor.extract_entities("I need 12 units of wireless headphones")
    assert _pairs(entities) == [
        (EntityType.PRODUCT, "headphones"),
        (EntityType.PRODUCT, "wireless"),
        (EntityType.QUANTITY, "12"),
        (EntityType.CATEGORY, "headphones"),
    ]


def test_bare_numbers_when_no_units(extractor):
    entities = extractor.extract_entities("can I get 3 or 4 speakers")
    quantities = [e.value for e in entities if e.entity == EntityType.QUANTITY]
    assert quantities == ["3", "4"]


def test_order_number_also_reads_as_quantity(extractor):
    """Known ambiguity: the digits of '#38291' are captured as a bare quantity too"""
    entities = extractor.extract_entities("what's the status of order #38291")
    assert _pairs(entities) == [
        (EntityType.QUANTITY, "38291"),
        (EntityType.ORDER_NUMBER, "38291"),
    ]


@pytest.mark.parametrize("text", [
    "order 555",
    "order:555",
    "order number: 555",
    "Order Number 555",
    "ORDER #555",
])
def test_order_number_forms(extractor, text):
    values = [e.value for e in extractor.extract_entities(text) if e.entity == EntityType.ORDER_NUMBER]
    assert values == ["555"]


def test_sku_digits_read_as_quantity(extractor):
    """Known ambiguity: WH-SWP-100 also yields quantity 100"""
    entities = extractor.extract_entities("check WH-SWP-100")
    assert (EntityType.QUANTITY, "100") in _pairs(entities)


def test_model_names_case_insensitive(extractor):
    text = "Tell me about the SoundWave Pro X"
    entities = extractor.extract_entities(text)
    model = [e for e in entities if e.value == "soundwave pro x"]
    assert len(model) == 1
    assert text[model[0].start:model[0].end] == "SoundWave Pro X"


def test_first_occurrence_only(extractor):
    entities = extractor.extract_entities("laptop or laptop stand")
    assert [e.value for e in entities if e.entity == EntityType.PRODUCT] == ["laptop"]


def test_offsets_stay_in_bounds(extractor):
    text = "Need 5 pcs of AUDIO gear, order #12 and SKU WH-BBE-300 in electronics"
    for entity in extractor.extract_entities(text):
        assert 0 <= entity.start <= entity.end <= len(text)


def test_extraction_is_idempotent(extractor):
    text = "do you have 3 bluetooth speakers (WH-SWP-100) for order 42?"
    assert extractor.extract_entities(text) == extractor.extract_entities(text)


def test_format_entities_drops_offsets(extractor):
    formatted = extractor.format_entities(extractor.extract_entities("2 units of SAM-GA14-KE"))

    assert formatted
    for entity in formatted:
        dumped = entity.model_dump()
        assert set(dumped) == {"entity", "value"}


def test_empty_text(extractor):
    assert extractor.extract_entities("") == []
