"""
Comparables Selector

Ranks comparables by precomputed similarity and derives price-distribution
statistics around the caller's estimate.
"""

from typing import List, Optional

from ..models import AssetCategory, ComparableAsset, PriceBand, PriceDistribution
from ..valuation import round_half_up
from .pool import ComparablePool, StaticComparablePool


# =============================================================================
# Configuration Constants
# =============================================================================

DEFAULT_LIMIT = 5
DISTRIBUTION_SAMPLE = 20
BAND_LOW = 0.85
BAND_HIGH = 1.15


class ComparablesSelector:
    """
    Selection and distribution over a comparable pool.

    Args:
        pool: Candidate pool (default: bundled reference comparables)
    """

    def __init__(self, pool: Optional[ComparablePool] = None):
        self._pool = pool if pool is not None else StaticComparablePool()

    def select(self, category: AssetCategory, estimate: float = None, limit: int = DEFAULT_LIMIT) -> List[ComparableAsset]:
        """
        Top ``limit`` comparables by similarity score, highest first.

        Ties keep pool order. The estimate does not affect ranking; it is
        accepted so callers can pass the same arguments to both operations.
        """
        candidates = list(self._pool.candidates(category))
        # sorted() is stable
        ranked = sorted(candidates, key=lambda c: c.similarity_score, reverse=True)
        return ranked[:max(limit, 0)]

    def distribution(self, category: AssetCategory, estimate: float) -> PriceDistribution:
        """
        Price statistics over the top comparables merged with ``estimate``.

        With an empty pool the statistics describe the estimate alone and the
        percentile is 0.
        """
        prices = [c.price for c in self.select(category, estimate, DISTRIBUTION_SAMPLE)]
        prices.append(estimate)
        prices.sort()

        n = len(prices)
        avg = sum(prices) / n
        # First index wins when the estimate equals a comparable price
        percentile = round_half_up(prices.index(estimate) / n * 100)

        return PriceDistribution(
            min=prices[0],
            max=prices[-1],
            avg=avg,
            median=prices[n // 2],
            percentile_of_estimate=percentile,
            band=PriceBand(low=avg * BAND_LOW, mid=avg, high=avg * BAND_HIGH),
            sample_size=n,
        )
