"""
Attribute Extractor

Chooses between delegated and local extraction. Never raises: delegated
failures fall back to the local rules for the same input.
"""

import logging
from typing import Optional, Tuple

from ..models import AssetCategory
from .delegated import LLMExtractionClient
from .rule_based import RuleBasedExtractor, derive_tiers
from .schemas import ATTRIBUTE_MODELS, AttributeMap, parse_attributes


logger = logging.getLogger(__name__)


METHOD_RULE_BASED = "rule-based"
METHOD_DELEGATED = "llm"
METHOD_FALLBACK = "rule-based-fallback"


class AttributeExtractor:
    """Free text to a category-specific attribute map."""

    def __init__(
        self,
        delegate: Optional[LLMExtractionClient] = None,
        rules: Optional[RuleBasedExtractor] = None,
    ):
        self._delegate = delegate
        self._rules = rules or RuleBasedExtractor()

    @property
    def delegated_enabled(self) -> bool:
        return self._delegate is not None and self._delegate.is_available()

    def extract(self, text: str, category: AssetCategory) -> AttributeMap:
        attributes, _ = self.extract_with_method(text, category)
        return attributes

    def extract_with_method(self, text: str, category: AssetCategory) -> Tuple[AttributeMap, str]:
        """
        Extract attributes and report which strategy produced them.

        Returns:
            (attributes, method) where method is one of "llm", "rule-based"
            or "rule-based-fallback"
        """
        method = METHOD_RULE_BASED

        if self.delegated_enabled:
            try:
                payload = self._delegate.extract(text, category)
                attributes = derive_tiers(parse_attributes(category, payload, strict=False))
                return attributes, METHOD_DELEGATED
            except Exception as exc:
                logger.warning("Delegated extraction failed, falling back to rules: %s", exc)
                method = METHOD_FALLBACK

        try:
            return self._rules.extract(text, category), method
        except Exception:
            logger.exception("Rule-based extraction failed for %s", category.value)
            return ATTRIBUTE_MODELS[category](), method
