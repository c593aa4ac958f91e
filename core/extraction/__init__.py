"""
Attribute extraction: free text to validated, category-specific attributes.
"""

from .schemas import (
    ATTRIBUTE_MODELS,
    AttributeMap,
    RealEstateAttributes,
    WatchAttributes,
    VehicleAttributes,
    parse_attributes,
    merge_attributes,
)
from .rule_based import RuleBasedExtractor, TIER_FIELDS, classify_location_tier, derive_tiers
from .delegated import LLMExtractionClient
from .extractor import (
    AttributeExtractor,
    METHOD_RULE_BASED,
    METHOD_DELEGATED,
    METHOD_FALLBACK,
)
from .prompts import system_prompt

__all__ = [
    "ATTRIBUTE_MODELS",
    "AttributeMap",
    "RealEstateAttributes",
    "WatchAttributes",
    "VehicleAttributes",
    "parse_attributes",
    "merge_attributes",
    "RuleBasedExtractor",
    "TIER_FIELDS",
    "classify_location_tier",
    "derive_tiers",
    "LLMExtractionClient",
    "AttributeExtractor",
    "METHOD_RULE_BASED",
    "METHOD_DELEGATED",
    "METHOD_FALLBACK",
    "system_prompt",
]
