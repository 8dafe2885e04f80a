"""
Pattern-based entity extraction

Pulls products, SKUs, quantities, order numbers and categories out of free
text with a fixed, ordered set of rules. Deterministic and side-effect free,
so it doubles as the fallback for hosted entity extraction.
"""

import re
from typing import Iterable, List, Tuple

from bizassist.models.chat import Entity, EntityType, EntityValue

COMMON_PRODUCTS: Tuple[str, ...] = (
    "headphones", "earbuds", "speakers", "soundbar", "microphone",
    "bluetooth", "wireless", "laptop", "smartphone", "tablet",
)

PRODUCT_MODELS: Tuple[str, ...] = (
    "soundwave pro x", "audiopeak max", "bassboost elite",
)

CATEGORIES: Tuple[str, ...] = (
    "electronics", "audio", "computers", "accessories", "speakers", "headphones",
)

# WH-SWP-100, SAM-GA14-KE, TEC-SP10C-KE, OPPO-A58-KE ...
SKU_PATTERN = re.compile(r"\b([a-z]{2,4}-[a-z0-9]{2,5}-[a-z0-9]{2,3})\b", re.IGNORECASE)
UNIT_QUANTITY_PATTERN = re.compile(r"\b(\d+)\s+(?:pcs|pieces|units|items)\b", re.IGNORECASE)
BARE_NUMBER_PATTERN = re.compile(r"\b(\d+)\b")
ORDER_NUMBER_PATTERN = re.compile(r"\border(?:\s+number)?(?:\s*|:)\s*#?(\d+)\b", re.IGNORECASE)


class EntityExtractor:
    """
    Rule-based entity extractor.

    Rules run in a fixed order and their results are concatenated without
    de-duplication:

    1. product words and product model names (first occurrence per term)
    2. SKUs
    3. unit-qualified quantities ("12 units")
    4. bare numbers as quantities, only when rule 3 found nothing
    5. order numbers
    6. category names (first occurrence per term)

    Rule 4 also captures digits inside SKUs and order numbers; that overlap is
    kept on purpose so hosted and rule-based outputs stay comparable.
    """

    def __init__(
        self,
        products: Iterable[str] = COMMON_PRODUCTS,
        product_models: Iterable[str] = PRODUCT_MODELS,
        categories: Iterable[str] = CATEGORIES,
    ):
        self.products = tuple(products)
        self.product_models = tuple(product_models)
        self.categories = tuple(categories)

    def extract_entities(self, message: str) -> List[Entity]:
        entities: List[Entity] = []

        entities.extend(self._match_vocabulary(message, self.products, EntityType.PRODUCT))
        entities.extend(self._match_vocabulary(message, self.product_models, EntityType.PRODUCT))
        entities.extend(self._extract_skus(message))

        quantities = self._match_pattern(message, UNIT_QUANTITY_PATTERN, EntityType.QUANTITY, whole_match=True)
        if not quantities:
            quantities = self._match_pattern(message, BARE_NUMBER_PATTERN, EntityType.QUANTITY)
        entities.extend(quantities)

        entities.extend(self._match_pattern(message, ORDER_NUMBER_PATTERN, EntityType.ORDER_NUMBER, whole_match=True))
        entities.extend(self._match_vocabulary(message, self.categories, EntityType.CATEGORY))

        return entities

    def format_entities(self, entities: Iterable[Entity]) -> List[EntityValue]:
        """Drop character offsets before entities leave the extractor."""
        return [entity.to_value() for entity in entities]

    @staticmethod
    def _match_vocabulary(message: str, terms: Iterable[str], entity_type: EntityType) -> List[Entity]:
        found = []
        for term in terms:
            # Search the original text so offsets stay valid for any casing
            match = re.search(re.escape(term), message, re.IGNORECASE)
            if match:
                found.append(Entity(entity=entity_type, value=term, start=match.start(), end=match.end()))
        return found

    @staticmethod
    def _extract_skus(message: str) -> List[Entity]:
        found = []
        for match in SKU_PATTERN.finditer(message):
            value = match.group(1)
            # Hyphenated words ("all-you-can") are not SKUs
            if not any(ch.isdigit() for ch in value):
                continue
            found.append(Entity(entity=EntityType.SKU, value=value, start=match.start(1), end=match.end(1)))
        return found

    @staticmethod
    def _match_pattern(
        message: str,
        pattern: "re.Pattern[str]",
        entity_type: EntityType,
        whole_match: bool = False,
    ) -> List[Entity]:
        found = []
        for match in pattern.finditer(message):
            span = match.span(0) if whole_match else match.span(1)
            found.append(Entity(entity=entity_type, value=match.group(1), start=span[0], end=span[1]))
        return found
