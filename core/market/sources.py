"""
Aggregate asset data feeding database-backed market statistics.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union

from ..models import AssetCategory


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetRecord:
    """One active listing as returned by the aggregate query."""
    price: float
    location: Optional[str] = None
    created_at: Optional[datetime] = None


class AggregateAssetSource(Protocol):
    """Anything that can list active assets for a category."""

    def fetch_active_assets(self, category: AssetCategory) -> Sequence[AssetRecord]:
        ...


class InMemoryAssetSource:
    """Aggregate source backed by a fixed list of records per category."""

    def __init__(self, records: Optional[Dict[AssetCategory, Iterable[AssetRecord]]] = None):
        self._records: Dict[AssetCategory, List[AssetRecord]] = {
            category: list(items) for category, items in (records or {}).items()
        }

    def fetch_active_assets(self, category: AssetCategory) -> Sequence[AssetRecord]:
        return tuple(self._records.get(category, ()))

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "InMemoryAssetSource":
        """
        Load a listing export.

        Expected format: a JSON array of objects with ``category``,
        ``price``, ``location``, optional ``created_at`` (ISO 8601) and
        optional ``status``. Only ``status == "active"`` (or no status) is
        kept; rows with an unknown category are skipped.
        """
        rows = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(rows, list):
            raise ValueError(f"{path}: expected a JSON array of asset records")

        records: Dict[AssetCategory, List[AssetRecord]] = {}
        skipped = 0
        for row in rows:
            category = AssetCategory.from_string(str(row.get("category", "")))
            if category is None or row.get("status", "active") != "active":
                skipped += 1
                continue
            created_at = row.get("created_at")
            records.setdefault(category, []).append(AssetRecord(
                price=float(row.get("price") or 0),
                location=row.get("location"),
                created_at=datetime.fromisoformat(created_at) if created_at else None,
            ))

        logger.info("Loaded %d asset records from %s (%d skipped)", len(rows) - skipped, path, skipped)
        return cls(records)
