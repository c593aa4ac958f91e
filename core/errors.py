"""
Error types raised by the valuation engine.

Only ValuationRequestError ever reaches a caller. Every other failure mode
degrades to a deterministic fallback.
"""

from typing import List, Optional

from .models import AssetCategory


class ValuationRequestError(ValueError):
    """Raised when a request is rejected before any computation starts."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Invalid valuation request: {'; '.join(errors)}")


class ExtractionServiceError(Exception):
    """The delegated extraction service was unavailable or returned garbage."""


def parse_category(value: Optional[str]) -> AssetCategory:
    """Resolve a category string or raise ValuationRequestError."""
    if isinstance(value, AssetCategory):
        return value
    if not value:
        raise ValuationRequestError(["category is required"])
    category = AssetCategory.from_string(value)
    if category is None:
        valid = ", ".join(c.value for c in AssetCategory)
        raise ValuationRequestError([f"unknown category '{value}' (expected one of: {valid})"])
    return category
