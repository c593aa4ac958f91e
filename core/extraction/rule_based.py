"""
Local rule-based attribute extraction.

Deterministic: the same text and category always produce the same map.
"""

import re
from typing import Any, Dict, Optional, Tuple

from ..models import AssetCategory
from .rules import (
    DEFAULT_LOCATION_TIER,
    CITIES,
    ENERGY_RATING_PATTERN,
    LOCATION_PATTERN,
    LOCATION_TIERS,
    MODEL_PATTERN,
    NUMBER,
    RULES_BY_CATEGORY,
    THOUSANDS_PATTERN,
    WATCH_REFERENCE_PATTERN,
    YEAR_PATTERN,
    EnumRule,
    NumericRule,
    RuleSet,
    TierRule,
)
from .schemas import AttributeMap, parse_attributes


def parse_number(raw: str) -> float:
    """Parse "85,5", "3.5" or "22.000" into a float."""
    if THOUSANDS_PATTERN.fullmatch(raw):
        return float(raw.replace(".", ""))
    return float(raw.replace(",", "."))


def extract_number(text: str, keywords: Tuple[str, ...]) -> Optional[float]:
    """First number that precedes one of ``keywords``, tried in keyword order."""
    lower = text.lower()
    for keyword in keywords:
        escaped = re.escape(keyword)
        match = re.search(NUMBER + r"\s*" + escaped, lower)
        if not match:
            match = re.search(r"(\d+)[-\s]*" + escaped, lower)
        if match:
            return parse_number(match.group(1))
    return None


def extract_year(text: str) -> Optional[int]:
    match = YEAR_PATTERN.search(text)
    return int(match.group(1)) if match else None


def match_enum(text: str, rule: EnumRule) -> Optional[str]:
    lower = text.lower()
    for branch in rule.chain:
        if any(keyword in lower for keyword in branch.keywords):
            return branch.value
    return rule.default


def match_brand(text: str, brands: Tuple[str, ...]) -> Optional[str]:
    """
    First brand in list order that occurs anywhere in the text.

    List order decides, not position in the text.
    """
    lower = text.lower()
    for brand in brands:
        if brand.lower() in lower:
            return brand
    return None


def extract_model(text: str, brand: str) -> Optional[str]:
    """Word run immediately following the brand token."""
    index = text.lower().find(brand.lower())
    if index < 0:
        return None
    match = MODEL_PATTERN.match(text[index + len(brand):])
    if not match:
        return None
    model = " ".join(match.group(1).split()).strip("- ")
    return model or None


def classify_tier(text: str, tiers: Tuple[TierRule, ...], default: int = 3) -> int:
    for rule in tiers:
        if rule.pattern.search(text):
            return rule.tier
    return default


def normalize_location(location: str) -> str:
    """Lowercase, separators to spaces, whitespace collapsed."""
    return " ".join(re.sub(r"[,;]", " ", location.lower()).split())


def classify_location_tier(location: str) -> int:
    normalized = normalize_location(location)
    for key, tier in LOCATION_TIERS:
        if key in normalized:
            return tier
    return DEFAULT_LOCATION_TIER


# category -> (tier field, fields the tier is classified from)
TIER_FIELDS: Dict[AssetCategory, Tuple[str, Tuple[str, ...]]] = {
    AssetCategory.REAL_ESTATE: ("location_tier", ("location", "city")),
    AssetCategory.WATCH: ("brand_tier", ("brand", "model")),
    AssetCategory.VEHICLE: ("brand_tier", ("brand", "model")),
}


def derive_tiers(
    attributes: AttributeMap,
    recompute: bool = False,
    rules: Optional[Dict[AssetCategory, RuleSet]] = None,
) -> AttributeMap:
    """
    Classify the tier field from location or brand when it is missing.

    Attributes that did not come from the local rules (delegated output,
    caller-supplied maps) carry no tier; this applies the same tables.

    Args:
        attributes: Attribute model
        recompute: Replace a present tier as well
        rules: Rule tables (default: built-in)
    """
    category = attributes.category
    tier_field, source_fields = TIER_FIELDS[category]
    values = attributes.to_dict()
    if values.get(tier_field) is not None and not recompute:
        return attributes

    source = " ".join(str(values[name]) for name in source_fields if values.get(name))
    if not source:
        return attributes

    if category == AssetCategory.REAL_ESTATE:
        tier = classify_location_tier(source)
    else:
        ruleset = (rules or RULES_BY_CATEGORY)[category]
        tier = classify_tier(source, ruleset.brand_tiers, ruleset.default_tier)
    return type(attributes).model_validate({**values, tier_field: tier})


class RuleBasedExtractor:
    """
    Extracts category attributes from German or English free text using the
    ordered tables in ``rules``.
    """

    def __init__(self, rules: Optional[Dict[AssetCategory, RuleSet]] = None):
        self._rules = rules or RULES_BY_CATEGORY

    def extract(self, text: str, category: AssetCategory) -> AttributeMap:
        return parse_attributes(category, self.extract_raw(text, category), strict=False)

    def extract_raw(self, text: str, category: AssetCategory) -> Dict[str, Any]:
        """Unvalidated field dictionary."""
        text = text or ""
        rules = self._rules[category]
        data: Dict[str, Any] = {}

        for rule in rules.numeric:
            data.update(self._apply_numeric(text, rule))

        year = extract_year(text)
        if year is not None:
            for field_name in rules.year_fields:
                data[field_name] = year

        for rule in rules.enums:
            value = match_enum(text, rule)
            if value is not None:
                data[rule.field] = value

        lower = text.lower()
        for rule in rules.booleans:
            data[rule.field] = any(keyword in lower for keyword in rule.keywords)

        if rules.brands:
            brand = match_brand(text, rules.brands)
            if brand:
                data["brand"] = brand
                model = extract_model(text, brand)
                if model:
                    data["model"] = model
            tier_text = " ".join(filter(None, [data.get("brand"), data.get("model")]))
            data["brand_tier"] = classify_tier(tier_text, rules.brand_tiers, rules.default_tier)

        if category == AssetCategory.WATCH:
            match = WATCH_REFERENCE_PATTERN.search(text)
            if match:
                data["reference"] = match.group(1)
        elif category == AssetCategory.REAL_ESTATE:
            data.update(self._extract_location(text))
            energy = ENERGY_RATING_PATTERN.search(lower)
            if energy:
                data["energy_rating"] = energy.group(1).upper()

        return data

    def _apply_numeric(self, text: str, rule: NumericRule) -> Dict[str, Any]:
        value = extract_number(text, rule.keywords)
        if value is None:
            return {} if rule.default is None else {rule.field: rule.default}
        return {rule.field: rule.cast(value)}

    def _extract_location(self, text: str) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        lower = text.lower()
        city = next((c for c in CITIES if c.lower() in lower), None)
        if city:
            data["city"] = city

        match = LOCATION_PATTERN.search(text)
        location = match.group(1) if match else city
        if location:
            data["location"] = location
            data["location_tier"] = classify_location_tier(f"{location} {city or ''}")
        return data
