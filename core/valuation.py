"""
Valuation Calculator

Turns a (possibly partial) attribute map into a priced estimate with a
range and a fixed confidence.

Pure: no randomness, no I/O. The only time-dependent input, the current
year for vehicle depreciation, is injected through ``reference_date``.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from utils.formatting import format_currency, format_number

from .errors import ValuationRequestError
from .extraction.schemas import (
    AttributeMap,
    RealEstateAttributes,
    VehicleAttributes,
    WatchAttributes,
    parse_attributes,
)
from .models import AssetCategory, ValuationResult


# =============================================================================
# Configuration Constants
# =============================================================================

LOWEST_TIER = 3


@dataclass
class PricingConfig:
    """Pricing constants. Defaults are the reference calibration."""

    # Real estate: EUR per square metre by location tier
    real_estate_base_per_sqm: Dict[int, int] = field(
        default_factory=lambda: {1: 12500, 2: 8500, 3: 6000}
    )
    real_estate_range: tuple = (0.88, 1.12)
    real_estate_confidence: Dict[int, float] = field(
        default_factory=lambda: {1: 0.78, 2: 0.72, 3: 0.72}
    )

    # Watches: flat price by brand tier
    watch_price_by_tier: Dict[int, int] = field(
        default_factory=lambda: {1: 18000, 2: 8500, 3: 4200}
    )
    watch_range: tuple = (0.82, 1.18)
    watch_confidence: float = 0.74

    # Vehicles: straight-line depreciation from a single base price
    vehicle_base_price: int = 220000
    vehicle_depreciation_per_year: float = 0.05
    vehicle_min_age_factor: float = 0.6
    vehicle_mileage_threshold: int = 60000
    vehicle_high_mileage_factor: float = 0.88
    vehicle_low_mileage_factor: float = 0.93
    vehicle_range: tuple = (0.85, 1.15)
    vehicle_confidence: float = 0.72


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _tier(value: Optional[int], table: Dict[int, Any]) -> int:
    return value if value in table else LOWEST_TIER


class ValuationCalculator:
    """
    Category-dispatched pricing heuristics.

    Missing tiers fall back to the lowest tier rather than failing.
    """

    def __init__(self, reference_date: date = None, pricing: PricingConfig = None):
        """
        Args:
            reference_date: Date used as "now" for vehicle age (default: today, read per call)
            pricing: Pricing constants (default: reference calibration)
        """
        self._reference_date = reference_date
        self._pricing = pricing or PricingConfig()

    @property
    def reference_date(self) -> date:
        """The fixed reference date, or today when none was given."""
        return self._reference_date or date.today()

    def evaluate(self, category: AssetCategory, attributes: Any) -> ValuationResult:
        """
        Price an asset.

        Args:
            category: Asset category
            attributes: Attribute model for the category, or a mapping that
                validates into one

        Raises:
            ValuationRequestError: attributes are malformed or belong to a
                different category
        """
        if isinstance(attributes, AttributeMap) and attributes.category != category:
            raise ValuationRequestError([
                f"attributes for '{attributes.category.value}' cannot be valued as '{category.value}'"
            ])
        attributes = parse_attributes(category, attributes, strict=True)

        if category == AssetCategory.REAL_ESTATE:
            return self._evaluate_real_estate(attributes)
        if category == AssetCategory.WATCH:
            return self._evaluate_watch(attributes)
        return self._evaluate_vehicle(attributes)

    # -------------------------------------------------------------------------
    # Per-category formulas
    # -------------------------------------------------------------------------

    def _evaluate_real_estate(self, attributes: RealEstateAttributes) -> ValuationResult:
        p = self._pricing
        tier = _tier(attributes.location_tier, p.real_estate_base_per_sqm)
        base = p.real_estate_base_per_sqm[tier]
        area = max(attributes.area_sqm or 0.0, 0.0)

        point = round_half_up(area * base)
        rationale = [
            f"Lage-Tier {tier}: {format_currency(base)} pro m²",
            f"Wohnfläche: {format_number(area)} m²",
        ]
        return self._build(point, p.real_estate_range, p.real_estate_confidence[tier], rationale)

    def _evaluate_watch(self, attributes: WatchAttributes) -> ValuationResult:
        p = self._pricing
        tier = _tier(attributes.brand_tier, p.watch_price_by_tier)
        point = p.watch_price_by_tier[tier]

        rationale = [f"Marken-Tier {tier}: Basiswert {format_currency(point)}"]
        if attributes.brand:
            rationale.append(f"Marke: {attributes.brand}")
        return self._build(point, p.watch_range, p.watch_confidence, rationale)

    def _evaluate_vehicle(self, attributes: VehicleAttributes) -> ValuationResult:
        p = self._pricing
        year = attributes.year or attributes.first_registration
        rationale: List[str] = []

        if year is None:
            age_factor = p.vehicle_min_age_factor
            rationale.append("Baujahr unbekannt: minimaler Altersfaktor")
        else:
            age = max(0, self.reference_date.year - year)
            age_factor = max(p.vehicle_min_age_factor, 1 - age * p.vehicle_depreciation_per_year)
            rationale.append(f"Alter {age} Jahre: Faktor {age_factor:.2f}")

        mileage = attributes.mileage_km
        if mileage is None or mileage > p.vehicle_mileage_threshold:
            mileage_factor = p.vehicle_high_mileage_factor
        else:
            mileage_factor = p.vehicle_low_mileage_factor
        if mileage is None:
            rationale.append(f"Laufleistung unbekannt: Faktor {mileage_factor:.2f}")
        else:
            rationale.append(f"Laufleistung {format_number(mileage)} km: Faktor {mileage_factor:.2f}")

        point = round_half_up(p.vehicle_base_price * age_factor * mileage_factor)
        return self._build(point, p.vehicle_range, p.vehicle_confidence, rationale)

    @staticmethod
    def _build(point: int, spread: tuple, confidence: float, rationale: List[str]) -> ValuationResult:
        low_factor, high_factor = spread
        return ValuationResult(
            point_estimate=point,
            low=round_half_up(point * low_factor),
            high=round_half_up(point * high_factor),
            confidence=confidence,
            rationale=tuple(rationale),
        )
