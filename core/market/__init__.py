"""
Market context: regional trend, supply/demand and seasonal signals.
"""

from .engine import MarketContextEngine, compute_price_stats, MIN_REGIONAL_RECORDS
from .regions import CITY_TO_REGION, PREMIUM_REGIONS, detect_region, is_premium_locality
from .seasonal import GERMAN_MONTHS, SEASONAL_TABLE, quarter_of, seasonal_context
from .sources import AggregateAssetSource, AssetRecord, InMemoryAssetSource

__all__ = [
    "MarketContextEngine",
    "compute_price_stats",
    "MIN_REGIONAL_RECORDS",
    "CITY_TO_REGION",
    "PREMIUM_REGIONS",
    "detect_region",
    "is_premium_locality",
    "GERMAN_MONTHS",
    "SEASONAL_TABLE",
    "quarter_of",
    "seasonal_context",
    "AggregateAssetSource",
    "AssetRecord",
    "InMemoryAssetSource",
]
