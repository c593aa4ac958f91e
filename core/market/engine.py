"""
Market Context Engine

Combines region detection, aggregated listings (when available) and fixed
heuristics into trend, supply/demand and seasonal signals.

Data source decision:
- >= 3 active listings in the detected region (every listing of the
  category when no region is detected): statistics from data
  (data_source = database)
- otherwise, or when the aggregate source is missing or fails: heuristic
  table keyed by category and premium location (data_source = estimated)
"""

import logging
from datetime import date
from typing import Optional, Sequence

from ..models import (
    AssetCategory,
    DataSource,
    DemandStatus,
    MarketContext,
    MarketTrend,
    PriceStats,
    SupplyDemand,
    TrendDirection,
)
from .regions import PREMIUM_REGIONS, detect_region, is_premium_locality
from .seasonal import seasonal_context
from .sources import AggregateAssetSource, AssetRecord


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Constants
# =============================================================================

MIN_REGIONAL_RECORDS = 3

# Real estate supply/demand thresholds (active listings)
RE_HIGH_DEMAND_BELOW = 5
RE_BALANCED_BELOW = 15

# Watches and vehicles
OTHER_HIGH_DEMAND_BELOW = 10

DATABASE_PERIOD = "YoY (geschätzt)"
ESTIMATED_PERIOD = "YoY (Branchendaten)"

HIGH = DemandStatus.HIGH
MEDIUM = DemandStatus.MEDIUM
LOW = DemandStatus.LOW


class MarketContextEngine:
    """
    Market signals for a category and optional location.

    Args:
        source: Optional aggregate listing source
        reference_date: Date used for the seasonal signal (default: today, read per call)
    """

    def __init__(self, source: Optional[AggregateAssetSource] = None, reference_date: date = None):
        self._source = source
        self._reference_date = reference_date

    @property
    def reference_date(self) -> date:
        return self._reference_date or date.today()

    def get_context(self, category: AssetCategory, location: Optional[str] = None) -> MarketContext:
        region = detect_region(location)
        seasonal = seasonal_context(category, self.reference_date)

        regional = self._regional_records(category, region)
        if len(regional) >= MIN_REGIONAL_RECORDS:
            return MarketContext(
                trend=self._database_trend(category, region),
                supply_demand=self._database_supply_demand(category, region, len(regional)),
                seasonal=seasonal,
                price_stats=compute_price_stats(regional),
                region=region,
            )

        logger.debug(
            "Using estimated market context for %s (region=%s, regional records=%d)",
            category.value, region, len(regional),
        )
        premium = is_premium_locality(location)
        return MarketContext(
            trend=self._estimated_trend(category, premium),
            supply_demand=self._estimated_supply_demand(category, premium),
            seasonal=seasonal,
            region=region,
        )

    def _regional_records(self, category: AssetCategory, region: Optional[str]) -> Sequence[AssetRecord]:
        if self._source is None:
            return ()
        try:
            records = self._source.fetch_active_assets(category)
        except Exception as exc:
            logger.warning("Aggregate asset query failed, using estimates: %s", exc)
            return ()
        if region is None:
            return list(records)
        needle = region.lower()
        return [r for r in records if r.location and needle in r.location.lower()]

    # -------------------------------------------------------------------------
    # Database-backed signals
    # -------------------------------------------------------------------------

    @staticmethod
    def _database_trend(category: AssetCategory, region: Optional[str]) -> MarketTrend:
        if category == AssetCategory.REAL_ESTATE and region in PREMIUM_REGIONS:
            return MarketTrend(
                TrendDirection.UP, 7.5, DATABASE_PERIOD,
                f"Starke Nachfrage in {region} treibt Preise", DataSource.DATABASE,
            )
        if category == AssetCategory.WATCH:
            return MarketTrend(
                TrendDirection.UP, 5.2, DATABASE_PERIOD,
                "Luxusuhren als Wertanlage weiterhin gefragt", DataSource.DATABASE,
            )
        return MarketTrend(
            TrendDirection.STABLE, 2.8, DATABASE_PERIOD,
            "Stabile Preisentwicklung im Markt", DataSource.DATABASE,
        )

    @staticmethod
    def _database_supply_demand(category: AssetCategory, region: Optional[str], active: int) -> SupplyDemand:
        if category == AssetCategory.REAL_ESTATE:
            if region in PREMIUM_REGIONS:
                return SupplyDemand(
                    HIGH, "Hohe Nachfrage",
                    f"Sehr begrenzte Verfügbarkeit in {region}. Käufer übersteigen Angebot deutlich.",
                    active,
                )
            if active < RE_HIGH_DEMAND_BELOW:
                return SupplyDemand(HIGH, "Hohe Nachfrage", "Geringes Angebot bei stabiler Nachfrage.", active)
            if active < RE_BALANCED_BELOW:
                return SupplyDemand(
                    MEDIUM, "Ausgeglichen", "Ausgewogenes Verhältnis von Angebot und Nachfrage.", active
                )
            return SupplyDemand(
                LOW, "Gutes Angebot",
                "Breite Auswahl verfügbar, gute Verhandlungsposition für Käufer.", active,
            )

        if active < OTHER_HIGH_DEMAND_BELOW:
            return SupplyDemand(HIGH, "Hohe Nachfrage", "Limitierte Verfügbarkeit bei starker Nachfrage.", active)
        return SupplyDemand(MEDIUM, "Stabiler Markt", "Gutes Angebot bei stabiler Nachfrage.", active)

    # -------------------------------------------------------------------------
    # Heuristic fallback
    # -------------------------------------------------------------------------

    @staticmethod
    def _estimated_trend(category: AssetCategory, premium: bool) -> MarketTrend:
        if category == AssetCategory.REAL_ESTATE:
            if premium:
                return MarketTrend(
                    TrendDirection.UP, 8.2, ESTIMATED_PERIOD,
                    "Starke Nachfrage in Toplage", DataSource.ESTIMATED,
                )
            return MarketTrend(
                TrendDirection.STABLE, 3.5, ESTIMATED_PERIOD,
                "Moderate Preissteigerung im Markt", DataSource.ESTIMATED,
            )
        if category == AssetCategory.WATCH:
            return MarketTrend(
                TrendDirection.UP, 5.8, ESTIMATED_PERIOD,
                "Luxusuhren als Wertanlage weiter gefragt", DataSource.ESTIMATED,
            )
        return MarketTrend(
            TrendDirection.STABLE, 2.1, ESTIMATED_PERIOD,
            "Sportwagen und Premium-SUVs stabil", DataSource.ESTIMATED,
        )

    @staticmethod
    def _estimated_supply_demand(category: AssetCategory, premium: bool) -> SupplyDemand:
        if category == AssetCategory.REAL_ESTATE:
            if premium:
                return SupplyDemand(
                    HIGH, "Hohe Nachfrage",
                    "Sehr begrenzte Verfügbarkeit in dieser Lage. Käufer übersteigen Angebot deutlich.",
                )
            return SupplyDemand(
                MEDIUM, "Stabiler Markt", "Ausgeglichenes Verhältnis von Angebot und Nachfrage im Markt."
            )
        if category == AssetCategory.WATCH:
            return SupplyDemand(
                HIGH, "Hohe Nachfrage",
                "Rolex und Patek Philippe Modelle erzielen Premiumpreise. "
                "Limitierte Verfügbarkeit treibt Preise.",
            )
        return SupplyDemand(
            MEDIUM, "Ausgeglichen", "Gutes Angebot bei Premiumfahrzeugen. Preise auf stabilem Niveau."
        )


def compute_price_stats(records: Sequence[AssetRecord]) -> Optional[PriceStats]:
    """Average, min and max over strictly positive prices."""
    prices = [r.price for r in records if r.price > 0]
    if not prices:
        return None
    return PriceStats(
        avg_price=int(round(sum(prices) / len(prices))),
        min_price=int(min(prices)),
        max_price=int(max(prices)),
        count=len(prices),
    )
