"""
Valuation Pipeline

Composes extraction, valuation, market context and comparables into one
ValuationReport per request. Holds collaborators only, no per-request state.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, Optional, Tuple

from .comparables import ComparablesSelector, DEFAULT_LIMIT
from .errors import ValuationRequestError, parse_category
from .extraction import (
    AttributeExtractor,
    AttributeMap,
    LLMExtractionClient,
    TIER_FIELDS,
    derive_tiers,
    merge_attributes,
    parse_attributes,
)
from .market import InMemoryAssetSource, MarketContextEngine
from .models import AssetCategory, ValuationReport
from .valuation import ValuationCalculator


logger = logging.getLogger(__name__)


# Fields without which a category cannot be meaningfully priced
REQUIRED_FIELDS: Dict[AssetCategory, Tuple[str, ...]] = {
    AssetCategory.REAL_ESTATE: ("area_sqm",),
    AssetCategory.WATCH: (),
    AssetCategory.VEHICLE: (),
}


class ValuationPipeline:
    """
    End-to-end valuation for one asset.

    Usage:
        pipeline = ValuationPipeline()
        report = pipeline.appraise("watch", text="Rolex Submariner 2018, Box und Papiere")
        pdf_bytes = pipeline.render(report)
    """

    def __init__(
        self,
        extractor: Optional[AttributeExtractor] = None,
        calculator: Optional[ValuationCalculator] = None,
        market: Optional[MarketContextEngine] = None,
        comparables: Optional[ComparablesSelector] = None,
    ):
        self.extractor = extractor or AttributeExtractor()
        self.calculator = calculator or ValuationCalculator()
        self.market = market or MarketContextEngine()
        self.comparables = comparables or ComparablesSelector()

    def prepare(
        self,
        category: Any,
        text: Optional[str] = None,
        attributes: Any = None,
    ) -> Tuple[AssetCategory, AttributeMap, Optional[str]]:
        """
        Validate the request and resolve its attributes.

        Explicit attributes override extracted ones.

        Raises:
            ValuationRequestError: unknown category, malformed attributes or
                missing required fields
        """
        category = parse_category(category)
        explicit = parse_attributes(category, attributes, strict=True)

        method = None
        resolved = explicit
        if text and text.strip():
            extracted, method = self.extractor.extract_with_method(text, category)
            resolved = merge_attributes(extracted, explicit)

        # A caller-supplied location or brand reclassifies the tier unless
        # the caller also supplied the tier
        tier_field, source_fields = TIER_FIELDS[category]
        given = explicit.to_dict()
        recompute = tier_field not in given and any(name in given for name in source_fields)
        resolved = derive_tiers(resolved, recompute=recompute)

        missing = [name for name in REQUIRED_FIELDS[category] if getattr(resolved, name) is None]
        if missing:
            raise ValuationRequestError([f"{name} is required for {category.value}" for name in missing])

        return category, resolved, method

    def appraise(
        self,
        category: Any,
        text: Optional[str] = None,
        attributes: Any = None,
        location: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> ValuationReport:
        category, resolved, method = self.prepare(category, text, attributes)
        location = location or _location_of(resolved)

        result = self.calculator.evaluate(category, resolved)
        estimate = result.point_estimate

        report = ValuationReport(
            category=category,
            attributes=resolved,
            result=result,
            market=self.market.get_context(category, location),
            comparables=self.comparables.select(category, estimate, limit),
            distribution=self.comparables.distribution(category, estimate),
            extraction_method=method,
        )
        logger.info(
            "Appraised %s at %d EUR (method=%s, source=%s)",
            category.value, estimate, method or "explicit", report.market.data_source.value,
        )
        return report

    async def appraise_async(
        self,
        category: Any,
        text: Optional[str] = None,
        attributes: Any = None,
        location: Optional[str] = None,
        limit: int = DEFAULT_LIMIT,
    ) -> ValuationReport:
        """
        Same as ``appraise`` with the blocking steps run in worker threads.

        Market context, comparables and distribution are independent of each
        other and are gathered concurrently.
        """
        category, resolved, method = await asyncio.to_thread(self.prepare, category, text, attributes)
        location = location or _location_of(resolved)

        result = self.calculator.evaluate(category, resolved)
        estimate = result.point_estimate

        market, comparables, distribution = await asyncio.gather(
            asyncio.to_thread(self.market.get_context, category, location),
            asyncio.to_thread(self.comparables.select, category, estimate, limit),
            asyncio.to_thread(self.comparables.distribution, category, estimate),
        )
        report = ValuationReport(
            category=category,
            attributes=resolved,
            result=result,
            market=market,
            comparables=comparables,
            distribution=distribution,
            extraction_method=method,
        )
        logger.info(
            "Appraised %s at %d EUR (method=%s, source=%s)",
            category.value, estimate, method or "explicit", market.data_source.value,
        )
        return report

    def render(self, report: ValuationReport, report_date: date = None) -> bytes:
        """Render a report to PDF bytes."""
        from reporting.pdf_generator import render_report

        return render_report(report, report_date=report_date)


def _location_of(attributes: AttributeMap) -> Optional[str]:
    return getattr(attributes, "location", None) or getattr(attributes, "city", None)


def build_pipeline(config, reference_date: date = None) -> ValuationPipeline:
    """
    Wire a pipeline from configuration.

    The delegated extraction client is created here, once, and only when an
    API key is configured. Aggregate listings are loaded from
    ``<data_dir>/assets.json`` when that file exists.
    """
    delegate = LLMExtractionClient.from_config(config) if config.openai_api_key else None

    source = None
    if config.assets_path.exists():
        source = InMemoryAssetSource.from_json_file(config.assets_path)

    return ValuationPipeline(
        extractor=AttributeExtractor(delegate=delegate),
        calculator=ValuationCalculator(reference_date=reference_date),
        market=MarketContextEngine(source=source, reference_date=reference_date),
    )
