"""
Tests for the Market Context Engine

Verifies:
- Region detection follows dictionary order
- Heuristic fallback when no source, too few records, or a failing source
- Database-backed statistics when >= 3 regional records exist
- Seasonal signal by quarter of the injected reference date
"""

import json
import sys
from datetime import date
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.market import (
    InMemoryAssetSource,
    MarketContextEngine,
    compute_price_stats,
    detect_region,
    is_premium_locality,
    quarter_of,
    seasonal_context,
)
from core.market.sources import AssetRecord
from core.models import (
    AssetCategory,
    DataSource,
    DemandStatus,
    SeasonalImpact,
    TrendDirection,
)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def may():
    return date(2025, 5, 15)


def _records(location, prices):
    return [AssetRecord(price=p, location=location) for p in prices]


@pytest.fixture
def make_engine(may):
    """Factory for engines backed by an in-memory source."""
    def _make(records=None, reference_date=None):
        source = InMemoryAssetSource(records) if records is not None else None
        return MarketContextEngine(source=source, reference_date=reference_date or may)
    return _make


class MovableDate(date):
    """date whose today() is set by the test."""
    current = date(2025, 1, 1)

    @classmethod
    def today(cls):
        return cls.current


class FailingSource:
    def fetch_active_assets(self, category):
        raise ConnectionError("database unavailable")


# =============================================================================
# Test: Region Detection
# =============================================================================

class TestRegionDetection:

    @pytest.mark.parametrize("location,region", [
        ("München Schwabing", "München"),
        ("Hamburg-Eppendorf", "Hamburg"),
        ("Köln Ehrenfeld", "Köln"),
        ("Starnberg", None),
        ("", None),
        (None, None),
    ])
    def test_detect_region(self, location, region):
        assert detect_region(location) == region

    def test_first_dictionary_key_wins(self):
        assert detect_region("Berliner Straße 5, München") == "München"

    def test_premium_locality(self):
        assert is_premium_locality("Grünwald bei München")
        assert is_premium_locality("Starnberg")
        assert not is_premium_locality("Leipzig")
        assert not is_premium_locality(None)


# =============================================================================
# Test: Seasonal Context
# =============================================================================

class TestSeasonal:

    def test_quarters(self):
        assert quarter_of(date(2025, 1, 31)) == 1
        assert quarter_of(date(2025, 5, 1)) == 2
        assert quarter_of(date(2025, 9, 30)) == 3
        assert quarter_of(date(2025, 10, 1)) == 4

    def test_month_name_is_german(self, may):
        assert seasonal_context(AssetCategory.WATCH, may).current_month == "Mai"
        assert seasonal_context(AssetCategory.WATCH, date(2025, 3, 2)).current_month == "März"

    @pytest.mark.parametrize("category,month,impact", [
        (AssetCategory.REAL_ESTATE, 2, SeasonalImpact.NEUTRAL),
        (AssetCategory.REAL_ESTATE, 4, SeasonalImpact.POSITIVE),
        (AssetCategory.REAL_ESTATE, 8, SeasonalImpact.POSITIVE),
        (AssetCategory.REAL_ESTATE, 11, SeasonalImpact.NEUTRAL),
        (AssetCategory.WATCH, 1, SeasonalImpact.NEGATIVE),
        (AssetCategory.WATCH, 6, SeasonalImpact.NEUTRAL),
        (AssetCategory.WATCH, 12, SeasonalImpact.POSITIVE),
        (AssetCategory.VEHICLE, 3, SeasonalImpact.NEUTRAL),
        (AssetCategory.VEHICLE, 5, SeasonalImpact.POSITIVE),
        (AssetCategory.VEHICLE, 7, SeasonalImpact.NEUTRAL),
        (AssetCategory.VEHICLE, 10, SeasonalImpact.POSITIVE),
    ])
    def test_impact_table(self, category, month, impact):
        assert seasonal_context(category, date(2025, month, 10)).impact == impact

    def test_default_date_read_per_call(self, monkeypatch):
        monkeypatch.setattr("core.market.engine.date", MovableDate)
        MovableDate.current = date(2025, 2, 1)
        engine = MarketContextEngine()

        MovableDate.current = date(2025, 11, 1)
        context = engine.get_context(AssetCategory.WATCH)

        assert context.seasonal.current_month == "November"
        assert context.seasonal.impact == SeasonalImpact.POSITIVE


# =============================================================================
# Test: Estimated Fallback
# =============================================================================

class TestEstimatedContext:

    def test_premium_real_estate_without_source(self, make_engine):
        context = make_engine().get_context(AssetCategory.REAL_ESTATE, "München")
        assert context.data_source == DataSource.ESTIMATED
        assert context.trend.direction == TrendDirection.UP
        assert context.trend.percentage == 8.2
        assert context.trend.period == "YoY (Branchendaten)"
        assert context.supply_demand.status == DemandStatus.HIGH
        assert context.price_stats is None
        assert context.region == "München"

    def test_premium_locality_without_region(self, make_engine):
        context = make_engine().get_context(AssetCategory.REAL_ESTATE, "Starnberg")
        assert context.region is None
        assert context.trend.percentage == 8.2

    def test_regular_real_estate(self, make_engine):
        context = make_engine().get_context(AssetCategory.REAL_ESTATE, "Leipzig")
        assert context.trend.direction == TrendDirection.STABLE
        assert context.trend.percentage == 3.5
        assert context.supply_demand.status == DemandStatus.MEDIUM
        assert context.supply_demand.label == "Stabiler Markt"

    def test_watch(self, make_engine):
        context = make_engine().get_context(AssetCategory.WATCH)
        assert context.trend.direction == TrendDirection.UP
        assert context.trend.percentage == 5.8
        assert context.supply_demand.status == DemandStatus.HIGH

    def test_vehicle(self, make_engine):
        context = make_engine().get_context(AssetCategory.VEHICLE, "Köln")
        assert context.trend.direction == TrendDirection.STABLE
        assert context.trend.percentage == 2.1
        assert context.supply_demand.label == "Ausgeglichen"

    def test_too_few_regional_records(self, make_engine):
        engine = make_engine({AssetCategory.WATCH: _records("Hamburg", [9000, 12000])})
        context = engine.get_context(AssetCategory.WATCH, "Hamburg")
        assert context.data_source == DataSource.ESTIMATED

    def test_records_outside_region_ignored(self, make_engine):
        engine = make_engine({AssetCategory.WATCH: _records("Berlin", [9000, 12000, 15000])})
        context = engine.get_context(AssetCategory.WATCH, "Hamburg")
        assert context.data_source == DataSource.ESTIMATED

    def test_failing_source_falls_back(self, may):
        engine = MarketContextEngine(source=FailingSource(), reference_date=may)
        context = engine.get_context(AssetCategory.REAL_ESTATE, "München")
        assert context.data_source == DataSource.ESTIMATED
        assert context.trend.percentage == 8.2

    def test_seasonal_always_present(self, make_engine):
        context = make_engine().get_context(AssetCategory.VEHICLE)
        assert context.seasonal.current_month == "Mai"
        assert context.seasonal.impact == SeasonalImpact.POSITIVE


# =============================================================================
# Test: Database-Backed Context
# =============================================================================

class TestDatabaseContext:

    def test_premium_region(self, make_engine):
        engine = make_engine({
            AssetCategory.REAL_ESTATE: _records("München Bogenhausen", [900000, 1200000, 1500000]),
        })
        context = engine.get_context(AssetCategory.REAL_ESTATE, "München")
        assert context.data_source == DataSource.DATABASE
        assert context.trend.percentage == 7.5
        assert context.trend.period == "YoY (geschätzt)"
        assert context.supply_demand.status == DemandStatus.HIGH
        assert context.supply_demand.active_listings == 3
        assert context.price_stats.avg_price == 1200000
        assert context.price_stats.min_price == 900000
        assert context.price_stats.max_price == 1500000
        assert context.price_stats.count == 3

    def test_region_match_is_case_insensitive(self, make_engine):
        engine = make_engine({AssetCategory.WATCH: _records("HAMBURG", [9000, 12000, 15000])})
        context = engine.get_context(AssetCategory.WATCH, "Hamburg Altona")
        assert context.data_source == DataSource.DATABASE
        assert context.trend.percentage == 5.2

    @pytest.mark.parametrize("count,status,label", [
        (4, DemandStatus.HIGH, "Hohe Nachfrage"),
        (5, DemandStatus.MEDIUM, "Ausgeglichen"),
        (14, DemandStatus.MEDIUM, "Ausgeglichen"),
        (15, DemandStatus.LOW, "Gutes Angebot"),
    ])
    def test_real_estate_thresholds(self, make_engine, count, status, label):
        engine = make_engine({AssetCategory.REAL_ESTATE: _records("Köln", [400000] * count)})
        context = engine.get_context(AssetCategory.REAL_ESTATE, "Köln")
        assert context.supply_demand.status == status
        assert context.supply_demand.label == label
        assert context.trend.direction == TrendDirection.STABLE
        assert context.trend.percentage == 2.8

    @pytest.mark.parametrize("count,status", [
        (9, DemandStatus.HIGH),
        (10, DemandStatus.MEDIUM),
    ])
    def test_vehicle_thresholds(self, make_engine, count, status):
        engine = make_engine({AssetCategory.VEHICLE: _records("Stuttgart", [150000] * count)})
        context = engine.get_context(AssetCategory.VEHICLE, "Stuttgart")
        assert context.supply_demand.status == status

    def test_no_region_uses_every_category_record(self, make_engine):
        engine = make_engine({
            AssetCategory.WATCH: _records("Zürich", [9000, 12000]) + _records(None, [15000]),
        })
        context = engine.get_context(AssetCategory.WATCH)
        assert context.data_source == DataSource.DATABASE
        assert context.region is None
        assert context.price_stats.count == 3
        assert context.price_stats.avg_price == 12000
        assert context.supply_demand.active_listings == 3

    def test_unknown_city_uses_every_category_record(self, make_engine):
        engine = make_engine({AssetCategory.WATCH: _records("Zürich", [9000, 12000, 15000])})
        context = engine.get_context(AssetCategory.WATCH, "Zürich")
        assert context.data_source == DataSource.DATABASE
        assert context.trend.percentage == 5.2

    def test_no_region_too_few_records(self, make_engine):
        engine = make_engine({AssetCategory.VEHICLE: _records("Köln", [90000, 95000])})
        context = engine.get_context(AssetCategory.VEHICLE)
        assert context.data_source == DataSource.ESTIMATED

    def test_price_stats_skip_non_positive(self):
        stats = compute_price_stats(_records("Berlin", [0, 100, 200, -5]))
        assert stats.count == 2
        assert stats.avg_price == 150
        assert compute_price_stats(_records("Berlin", [0])) is None


# =============================================================================
# Test: JSON Listing Export
# =============================================================================

class TestJsonSource:

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "assets.json"
        path.write_text(json.dumps([
            {"category": "watch", "price": 9000, "location": "Hamburg", "created_at": "2025-01-02T10:00:00"},
            {"category": "luxusuhren", "price": 11000, "location": "Hamburg"},
            {"category": "watch", "price": 13000, "location": "Hamburg", "status": "sold"},
            {"category": "boat", "price": 50000, "location": "Kiel"},
            {"category": "immobilien", "price": 800000, "location": "Berlin"},
        ]), encoding="utf-8")

        source = InMemoryAssetSource.from_json_file(path)
        assert len(source.fetch_active_assets(AssetCategory.REAL_ESTATE)) == 1
        watches = source.fetch_active_assets(AssetCategory.WATCH)
        assert [r.price for r in watches] == [9000.0, 11000.0]
        assert watches[0].created_at.year == 2025
        assert source.fetch_active_assets(AssetCategory.VEHICLE) == ()

    def test_rejects_non_array(self, tmp_path):
        path = tmp_path / "assets.json"
        path.write_text('{"category": "watch"}', encoding="utf-8")
        with pytest.raises(ValueError):
            InMemoryAssetSource.from_json_file(path)
