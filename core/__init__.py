"""
ASSERO Valuation Engine - Core Business Logic

Pipeline:
1. Attribute Extraction (delegated LLM or local rules, with fallback)
2. Valuation (tiered / depreciated pricing heuristics)
3. Market Context (regional trend, supply/demand, seasonality)
4. Comparables (similarity ranking, price distribution)

Reports are rendered by the ``reporting`` package.
"""

from .models import (
    AssetCategory,
    ValuationResult,
    ComparableAsset,
    PriceBand,
    PriceDistribution,
    MarketTrend,
    SupplyDemand,
    SeasonalContext,
    PriceStats,
    MarketContext,
    ValuationReport,
    TrendDirection,
    DataSource,
    DemandStatus,
    SeasonalImpact,
)
from .errors import ValuationRequestError, ExtractionServiceError, parse_category

from .extraction import (
    AttributeExtractor,
    AttributeMap,
    RealEstateAttributes,
    WatchAttributes,
    VehicleAttributes,
    RuleBasedExtractor,
    LLMExtractionClient,
    parse_attributes,
)
from .valuation import ValuationCalculator, PricingConfig
from .market import MarketContextEngine, AggregateAssetSource, AssetRecord, InMemoryAssetSource
from .comparables import ComparablesSelector, ComparablePool, StaticComparablePool
from .pipeline import ValuationPipeline, build_pipeline

__all__ = [
    # Models
    "AssetCategory",
    "ValuationResult",
    "ComparableAsset",
    "PriceBand",
    "PriceDistribution",
    "MarketTrend",
    "SupplyDemand",
    "SeasonalContext",
    "PriceStats",
    "MarketContext",
    "ValuationReport",
    "TrendDirection",
    "DataSource",
    "DemandStatus",
    "SeasonalImpact",
    # Errors
    "ValuationRequestError",
    "ExtractionServiceError",
    "parse_category",
    # Extraction
    "AttributeExtractor",
    "AttributeMap",
    "RealEstateAttributes",
    "WatchAttributes",
    "VehicleAttributes",
    "RuleBasedExtractor",
    "LLMExtractionClient",
    "parse_attributes",
    # Valuation
    "ValuationCalculator",
    "PricingConfig",
    # Market context
    "MarketContextEngine",
    "AggregateAssetSource",
    "AssetRecord",
    "InMemoryAssetSource",
    # Comparables
    "ComparablesSelector",
    "ComparablePool",
    "StaticComparablePool",
    # Pipeline
    "ValuationPipeline",
    "build_pipeline",
]
