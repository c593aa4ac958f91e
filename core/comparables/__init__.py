"""
Comparable assets: ranking and price distribution.
"""

from .pool import ComparablePool, StaticComparablePool, REFERENCE_COMPARABLES
from .selector import ComparablesSelector, DEFAULT_LIMIT, DISTRIBUTION_SAMPLE

__all__ = [
    "ComparablePool",
    "StaticComparablePool",
    "REFERENCE_COMPARABLES",
    "ComparablesSelector",
    "DEFAULT_LIMIT",
    "DISTRIBUTION_SAMPLE",
]
