"""
Data models for the valuation engine.

Every model here is created fresh per valuation request and never mutated
afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class AssetCategory(Enum):
    """
    Top-level dispatch key for attribute schema, extraction rules and pricing.
    """
    REAL_ESTATE = "real_estate"
    WATCH = "watch"
    VEHICLE = "vehicle"

    @classmethod
    def from_string(cls, value: str) -> Optional["AssetCategory"]:
        """Convert string to AssetCategory, case-insensitive, with aliases."""
        if not value:
            return None
        normalised = value.lower().strip().replace("-", "_")
        normalised = _CATEGORY_ALIASES.get(normalised, normalised)
        for member in cls:
            if member.value == normalised:
                return member
        return None


_CATEGORY_ALIASES = {
    "realestate": "real_estate",
    "immobilie": "real_estate",
    "immobilien": "real_estate",
    "watches": "watch",
    "uhr": "watch",
    "uhren": "watch",
    "luxusuhren": "watch",
    "vehicles": "vehicle",
    "fahrzeug": "vehicle",
    "fahrzeuge": "vehicle",
}


class TrendDirection(Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class DataSource(Enum):
    """Where a market context came from."""
    DATABASE = "database"
    ESTIMATED = "estimated"


class DemandStatus(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SeasonalImpact(Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


# =============================================================================
# Valuation
# =============================================================================

@dataclass(frozen=True)
class ValuationResult:
    """
    Priced estimate for a single asset.

    Invariants: low <= point_estimate <= high, 0 <= confidence <= 1.
    """
    point_estimate: int
    low: int
    high: int
    confidence: float
    currency: str = "EUR"
    rationale: Tuple[str, ...] = ()

    def __post_init__(self):
        if not (self.low <= self.point_estimate <= self.high):
            raise ValueError(
                f"range invariant violated: {self.low} <= {self.point_estimate} <= {self.high}"
            )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError("confidence must be between 0 and 1")

    def to_dict(self) -> dict:
        return {
            "point_estimate": self.point_estimate,
            "low": self.low,
            "high": self.high,
            "confidence": self.confidence,
            "currency": self.currency,
            "rationale": list(self.rationale),
        }


# =============================================================================
# Comparables
# =============================================================================

@dataclass(frozen=True)
class ComparableAsset:
    """A read-only reference asset used to benchmark an estimate."""
    id: str
    category: AssetCategory
    title: str
    price: int
    similarity_score: int  # 0-100, precomputed
    attributes: Dict[str, Any] = field(default_factory=dict)
    location: str = ""

    def __post_init__(self):
        if not 0 <= self.similarity_score <= 100:
            raise ValueError("similarity_score must be between 0 and 100")
        if self.price < 0:
            raise ValueError("price must be non-negative")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "title": self.title,
            "price": self.price,
            "similarity_score": self.similarity_score,
            "attributes": dict(self.attributes),
            "location": self.location,
        }


@dataclass(frozen=True)
class PriceBand:
    low: float
    mid: float
    high: float


@dataclass(frozen=True)
class PriceDistribution:
    """Price statistics over comparables merged with the caller's estimate."""
    min: float
    max: float
    avg: float
    median: float
    percentile_of_estimate: int
    band: PriceBand
    sample_size: int

    def to_dict(self) -> dict:
        return {
            "min": self.min,
            "max": self.max,
            "avg": self.avg,
            "median": self.median,
            "percentile_of_estimate": self.percentile_of_estimate,
            "band": {"low": self.band.low, "mid": self.band.mid, "high": self.band.high},
            "sample_size": self.sample_size,
        }


# =============================================================================
# Market Context
# =============================================================================

@dataclass(frozen=True)
class MarketTrend:
    direction: TrendDirection
    percentage: float
    period: str
    description: str
    data_source: DataSource


@dataclass(frozen=True)
class SupplyDemand:
    status: DemandStatus
    label: str
    description: str
    active_listings: Optional[int] = None


@dataclass(frozen=True)
class SeasonalContext:
    current_month: str
    impact: SeasonalImpact
    description: str


@dataclass(frozen=True)
class PriceStats:
    avg_price: int
    min_price: int
    max_price: int
    count: int


@dataclass(frozen=True)
class MarketContext:
    """Trend, supply/demand and seasonal signals for a category and region."""
    trend: MarketTrend
    supply_demand: SupplyDemand
    seasonal: Optional[SeasonalContext] = None
    price_stats: Optional[PriceStats] = None
    region: Optional[str] = None

    @property
    def data_source(self) -> DataSource:
        return self.trend.data_source

    def to_dict(self) -> dict:
        data = {
            "region": self.region,
            "trend": {
                "direction": self.trend.direction.value,
                "percentage": self.trend.percentage,
                "period": self.trend.period,
                "description": self.trend.description,
                "data_source": self.trend.data_source.value,
            },
            "supply_demand": {
                "status": self.supply_demand.status.value,
                "label": self.supply_demand.label,
                "description": self.supply_demand.description,
                "active_listings": self.supply_demand.active_listings,
            },
            "seasonal": None,
            "price_stats": None,
        }
        if self.seasonal:
            data["seasonal"] = {
                "current_month": self.seasonal.current_month,
                "impact": self.seasonal.impact.value,
                "description": self.seasonal.description,
            }
        if self.price_stats:
            data["price_stats"] = {
                "avg_price": self.price_stats.avg_price,
                "min_price": self.price_stats.min_price,
                "max_price": self.price_stats.max_price,
                "count": self.price_stats.count,
            }
        return data


# =============================================================================
# Report
# =============================================================================

@dataclass
class ValuationReport:
    """
    Everything produced for one valuation request.

    The attributes object is the validated attribute model for the category.
    """
    category: AssetCategory
    attributes: Any
    result: ValuationResult
    market: MarketContext
    comparables: List[ComparableAsset] = field(default_factory=list)
    distribution: Optional[PriceDistribution] = None
    extraction_method: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "attributes": self.attributes.to_dict(),
            "valuation": self.result.to_dict(),
            "market": self.market.to_dict(),
            "comparables": [c.to_dict() for c in self.comparables],
            "distribution": self.distribution.to_dict() if self.distribution else None,
            "extraction_method": self.extraction_method,
        }
