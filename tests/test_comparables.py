"""
Tests for the Comparables Selector

Verifies:
- Ranking by similarity score, descending, stable on ties
- Limit handling
- Distribution statistics and percentile of the estimate
- Empty pools degrade to the estimate alone
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.comparables import ComparablesSelector, StaticComparablePool
from core.models import AssetCategory, ComparableAsset


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def selector():
    return ComparablesSelector()


@pytest.fixture
def make_comparable():
    """Factory for pool entries with sensible defaults."""
    def _make(id, price, score, category=AssetCategory.WATCH):
        return ComparableAsset(id=id, category=category, title=f"Asset {id}", price=price, similarity_score=score)
    return _make


# =============================================================================
# Test: Selection
# =============================================================================

class TestSelect:

    def test_watch_top_three(self, selector):
        selected = selector.select(AssetCategory.WATCH, 18000, limit=3)
        assert [c.id for c in selected] == ["watch-1", "watch-3", "watch-5"]

    def test_default_limit_returns_whole_category(self, selector):
        selected = selector.select(AssetCategory.REAL_ESTATE, 1500000)
        assert [c.id for c in selected] == ["re-1", "re-3", "re-4", "re-2", "re-5"]
        assert all(c.category == AssetCategory.REAL_ESTATE for c in selected)

    def test_scores_descending(self, selector):
        scores = [c.similarity_score for c in selector.select(AssetCategory.VEHICLE, 160000)]
        assert scores == sorted(scores, reverse=True)

    def test_zero_and_negative_limit(self, selector):
        assert selector.select(AssetCategory.WATCH, 18000, limit=0) == []
        assert selector.select(AssetCategory.WATCH, 18000, limit=-2) == []

    def test_estimate_does_not_change_ranking(self, selector):
        low = selector.select(AssetCategory.VEHICLE, 1)
        high = selector.select(AssetCategory.VEHICLE, 10_000_000)
        assert low == high

    def test_ties_keep_pool_order(self, make_comparable):
        pool = StaticComparablePool([
            make_comparable("a", 100, 80),
            make_comparable("b", 200, 90),
            make_comparable("c", 300, 80),
            make_comparable("d", 400, 90),
        ])
        selected = ComparablesSelector(pool).select(AssetCategory.WATCH, 250)
        assert [c.id for c in selected] == ["b", "d", "a", "c"]

    def test_pool_is_not_mutated(self, selector):
        before = [c.id for c in selector.select(AssetCategory.WATCH, 0, limit=20)]
        selector.select(AssetCategory.WATCH, 0, limit=1)
        after = [c.id for c in selector.select(AssetCategory.WATCH, 0, limit=20)]
        assert before == after


# =============================================================================
# Test: Distribution
# =============================================================================

class TestDistribution:

    def test_watch_distribution(self, selector):
        dist = selector.distribution(AssetCategory.WATCH, 18000)
        assert dist.sample_size == 6
        assert dist.min == 4800
        assert dist.max == 18000
        assert dist.median == 11800
        assert dist.avg == pytest.approx(66200 / 6)
        assert dist.percentile_of_estimate == 83
        assert dist.band.mid == pytest.approx(dist.avg)
        assert dist.band.low == pytest.approx(dist.avg * 0.85)
        assert dist.band.high == pytest.approx(dist.avg * 1.15)

    def test_estimate_equal_to_comparable_uses_first_index(self, selector):
        dist = selector.distribution(AssetCategory.WATCH, 10200)
        assert dist.percentile_of_estimate == 33

    def test_lowest_estimate_is_zero_percentile(self, selector):
        dist = selector.distribution(AssetCategory.VEHICLE, 1000)
        assert dist.percentile_of_estimate == 0
        assert dist.min == 1000

    def test_percentile_bounds(self, selector):
        for estimate in (0, 50000, 95000, 10_000_000):
            dist = selector.distribution(AssetCategory.VEHICLE, estimate)
            assert 0 <= dist.percentile_of_estimate <= 100

    def test_empty_pool(self):
        dist = ComparablesSelector(StaticComparablePool([])).distribution(AssetCategory.WATCH, 5000)
        assert dist.sample_size == 1
        assert dist.min == dist.max == dist.median == dist.avg == 5000
        assert dist.percentile_of_estimate == 0

    def test_sample_capped_at_twenty(self, make_comparable):
        pool = StaticComparablePool([make_comparable(str(i), 1000 + i, i) for i in range(30)])
        dist = ComparablesSelector(pool).distribution(AssetCategory.WATCH, 500)
        assert dist.sample_size == 21
        # Only the 20 most similar (highest i) survive
        assert dist.max == 1029
        assert dist.min == 500
        assert dist.median == 1019

    def test_to_dict(self, selector):
        data = selector.distribution(AssetCategory.WATCH, 18000).to_dict()
        assert set(data) == {"min", "max", "avg", "median", "percentile_of_estimate", "band", "sample_size"}
        assert set(data["band"]) == {"low", "mid", "high"}
