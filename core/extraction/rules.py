"""
Ordered rule tables for local attribute extraction.

Order is significant everywhere in this module: the first matching entry
wins. Keywords are matched against lower-cased text.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Pattern, Tuple

from ..models import AssetCategory


# =============================================================================
# Rule Types
# =============================================================================

@dataclass(frozen=True)
class NumericRule:
    """Number immediately preceding one of ``keywords``."""
    field: str
    keywords: Tuple[str, ...]
    cast: Callable[[float], Any] = float
    default: Optional[Any] = None


@dataclass(frozen=True)
class KeywordRule:
    """``value`` applies when any keyword occurs in the text."""
    keywords: Tuple[str, ...]
    value: Any


@dataclass(frozen=True)
class EnumRule:
    field: str
    chain: Tuple[KeywordRule, ...]
    default: Optional[str] = None


@dataclass(frozen=True)
class BooleanRule:
    field: str
    keywords: Tuple[str, ...]


@dataclass(frozen=True)
class TierRule:
    pattern: Pattern
    tier: int


@dataclass(frozen=True)
class RuleSet:
    """All extraction rules for one category."""
    numeric: Tuple[NumericRule, ...] = ()
    enums: Tuple[EnumRule, ...] = ()
    booleans: Tuple[BooleanRule, ...] = ()
    year_fields: Tuple[str, ...] = ()
    brands: Tuple[str, ...] = ()
    brand_tiers: Tuple[TierRule, ...] = field(default=())
    default_tier: int = 3


# =============================================================================
# Shared Patterns
# =============================================================================

YEAR_PATTERN = re.compile(r"\b(19\d{2}|20\d{2})\b")

# German thousands grouping first ("22.000"), then plain decimals ("85,5")
NUMBER = r"(\d{1,3}(?:\.\d{3})+|\d+[.,]?\d*)"
THOUSANDS_PATTERN = re.compile(r"\d{1,3}(?:\.\d{3})+")

WATCH_REFERENCE_PATTERN = re.compile(r"\b(\d{5,6}[A-Z]*)\b")
LOCATION_PATTERN = re.compile(r"\bin ([A-ZÄÖÜ][a-zäöüß]+(?:\s+[A-ZÄÖÜ][a-zäöüß]+)*)")
ENERGY_RATING_PATTERN = re.compile(r"energie(?:effizienz)?klasse\s*:?\s*([a-h]\+{0,2})(?![a-z])")
MODEL_PATTERN = re.compile(r"\s*([\w\s\-]+)")


# =============================================================================
# Real Estate
# =============================================================================

CITIES = ("München", "Hamburg", "Berlin", "Frankfurt", "Köln", "Stuttgart", "Düsseldorf")

# Premium districts precede their city so they win the first-match scan
LOCATION_TIERS = (
    ("berlin mitte", 1),
    ("berlin-mitte", 1),
    ("berlin charlottenburg", 1),
    ("berlin prenzlauer berg", 1),
    ("prenzlauer berg", 1),
    ("charlottenburg", 1),
    ("frankfurt westend", 1),
    ("düsseldorf oberkassel", 1),
    ("münchen", 1),
    ("munich", 1),
    ("hamburg", 1),
    ("starnberg", 1),
    ("grünwald", 1),
    ("frankfurt", 2),
    ("stuttgart", 2),
    ("düsseldorf", 2),
    ("köln", 2),
    ("berlin", 2),
)
DEFAULT_LOCATION_TIER = 3

REAL_ESTATE_RULES = RuleSet(
    numeric=(
        NumericRule("area_sqm", ("m²", "m2", "qm", "quadratmeter")),
        NumericRule("rooms", ("zimmer", "zi")),
        NumericRule("floor", ("stock", "etage", "og"), cast=int),
    ),
    enums=(
        EnumRule("property_type", (
            KeywordRule(("penthouse",), "penthouse"),
            KeywordRule(("villa",), "villa"),
            KeywordRule(("haus",), "house"),
            KeywordRule(("wohnung",), "apartment"),
        ), default="apartment"),
        EnumRule("condition", (
            KeywordRule(("neubau", "neu"), "new"),
            KeywordRule(("saniert", "renoviert"), "renovated"),
            KeywordRule(("gut",), "good"),
        ), default="good"),
    ),
    booleans=(
        BooleanRule("has_balcony", ("balkon", "terrasse")),
        BooleanRule("has_parking", ("stellplatz", "garage", "tiefgarage")),
        BooleanRule("has_garden", ("garten",)),
        BooleanRule("has_elevator", ("aufzug", "fahrstuhl", "lift")),
    ),
    year_fields=("build_year",),
)


# =============================================================================
# Watches
# =============================================================================

WATCH_RULES = RuleSet(
    enums=(
        EnumRule("condition", (
            KeywordRule(("mint", "ungetragen", "neu"), "mint"),
            KeywordRule(("sehr gut", "top"), "very_good"),
            KeywordRule(("gut",), "good"),
        ), default="good"),
    ),
    booleans=(
        BooleanRule("has_box", ("box",)),
        BooleanRule("has_papers", ("papiere", "papers", "zertifikat")),
        BooleanRule("has_service_history", ("service", "revision")),
        BooleanRule("is_limited_edition", ("limited", "limitiert")),
        BooleanRule("is_unpolished", ("unpoliert", "unpolished")),
    ),
    year_fields=("year",),
    brands=("Rolex", "Patek Philippe", "Audemars Piguet", "Omega", "IWC", "Cartier", "TAG Heuer"),
    brand_tiers=(
        TierRule(re.compile(r"patek|rolex|audemars", re.IGNORECASE), 1),
        TierRule(re.compile(r"omega|iwc|cartier", re.IGNORECASE), 2),
    ),
)


# =============================================================================
# Vehicles
# =============================================================================

VEHICLE_RULES = RuleSet(
    numeric=(
        NumericRule("mileage_km", ("km", "kilometer"), cast=int),
        NumericRule("previous_owners", ("besitzer", "vorbesitzer", "hand"), cast=int, default=0),
    ),
    enums=(
        EnumRule("vehicle_type", (
            KeywordRule(("sportwagen", "sport"), "sports_car"),
            KeywordRule(("cabrio", "cabriolet"), "convertible"),
            KeywordRule(("coupé", "coupe"), "coupe"),
            KeywordRule(("suv",), "suv"),
            KeywordRule(("limousine",), "sedan"),
        ), default="sports_car"),
        EnumRule("condition", (
            KeywordRule(("neuwertig", "wie neu"), "excellent"),
            KeywordRule(("gut",), "good"),
        ), default="used"),
        EnumRule("color", (
            KeywordRule(("schwarz",), "schwarz"),
            KeywordRule(("weiß", "weiss"), "weiß"),
            KeywordRule(("silber",), "silber"),
            KeywordRule(("grau",), "grau"),
            KeywordRule(("blau",), "blau"),
            KeywordRule(("rot",), "rot"),
            KeywordRule(("grün", "gruen"), "grün"),
        )),
    ),
    booleans=(
        BooleanRule("is_accident_free", ("unfallfrei", "unfall-frei", "accident free", "accident-free")),
        BooleanRule("has_service_book", ("scheckheft", "serviceheft")),
        BooleanRule("has_warranty", ("garantie", "warranty")),
    ),
    year_fields=("year", "first_registration"),
    brands=("Ferrari", "Lamborghini", "Porsche", "Mercedes", "BMW", "Audi", "Bentley", "Rolls-Royce"),
    brand_tiers=(
        TierRule(re.compile(r"ferrari|lamborghini|porsche", re.IGNORECASE), 1),
        TierRule(re.compile(r"mercedes|bmw|audi", re.IGNORECASE), 2),
    ),
)


RULES_BY_CATEGORY = {
    AssetCategory.REAL_ESTATE: REAL_ESTATE_RULES,
    AssetCategory.WATCH: WATCH_RULES,
    AssetCategory.VEHICLE: VEHICLE_RULES,
}
