"""
Comparable asset pools.

Reference data only: nothing in the engine mutates a pool.
"""

from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple

from ..models import AssetCategory, ComparableAsset


class ComparablePool(Protocol):
    """Source of candidate comparables per category."""

    def candidates(self, category: AssetCategory) -> Sequence[ComparableAsset]:
        ...


RE = AssetCategory.REAL_ESTATE
WATCH = AssetCategory.WATCH
VEHICLE = AssetCategory.VEHICLE


REFERENCE_COMPARABLES: Tuple[ComparableAsset, ...] = (
    # Real estate
    ComparableAsset(
        "re-1", RE, "3-Zimmer Wohnung, Altstadt", 520000, 94,
        {"Fläche": "95 m²", "Zimmer": 3, "Zustand": "Renoviert", "Lage": "Toplage"},
        "München, Altstadt",
    ),
    ComparableAsset(
        "re-2", RE, "4-Zimmer Maisonette, Zentrum", 580000, 87,
        {"Fläche": "110 m²", "Zimmer": 4, "Zustand": "Neubau", "Lage": "Toplage"},
        "München, Maxvorstadt",
    ),
    ComparableAsset(
        "re-3", RE, "3.5-Zimmer Wohnung, Schwabing", 495000, 91,
        {"Fläche": "92 m²", "Zimmer": 3.5, "Zustand": "Renoviert", "Lage": "Gute Lage"},
        "München, Schwabing",
    ),
    ComparableAsset(
        "re-4", RE, "3-Zimmer Penthouse, Altbau", 615000, 89,
        {"Fläche": "105 m²", "Zimmer": 3, "Zustand": "Neubau", "Lage": "Toplage"},
        "München, Lehel",
    ),
    ComparableAsset(
        "re-5", RE, "2.5-Zimmer Wohnung, Haidhausen", 445000, 82,
        {"Fläche": "88 m²", "Zimmer": 2.5, "Zustand": "Renoviert", "Lage": "Gute Lage"},
        "München, Haidhausen",
    ),
    # Watches
    ComparableAsset(
        "watch-1", WATCH, "Rolex Submariner Date 41mm", 12500, 96,
        {"Marke": "Rolex", "Modell": "Submariner", "Zustand": "Sehr gut", "Full Set": "Ja"},
    ),
    ComparableAsset(
        "watch-2", WATCH, "Omega Seamaster Diver 300M", 4800, 88,
        {"Marke": "Omega", "Modell": "Seamaster", "Zustand": "Mint", "Full Set": "Ja"},
    ),
    ComparableAsset(
        "watch-3", WATCH, "Rolex Datejust 41", 10200, 92,
        {"Marke": "Rolex", "Modell": "Datejust", "Zustand": "Sehr gut", "Full Set": "Nein"},
    ),
    ComparableAsset(
        "watch-4", WATCH, "IWC Portugieser Chronograph", 8900, 85,
        {"Marke": "IWC", "Modell": "Portugieser", "Zustand": "Mint", "Full Set": "Ja"},
    ),
    ComparableAsset(
        "watch-5", WATCH, "Rolex Explorer II 42mm", 11800, 90,
        {"Marke": "Rolex", "Modell": "Explorer II", "Zustand": "Sehr gut", "Full Set": "Ja"},
    ),
    # Vehicles
    ComparableAsset(
        "vehicle-1", VEHICLE, "Porsche 911 Carrera S", 95000, 93,
        {"Marke": "Porsche", "Modell": "911 Carrera S", "Baujahr": 2021,
         "Kilometerstand": "25.000 km", "Zustand": "Sehr gut"},
        "München",
    ),
    ComparableAsset(
        "vehicle-2", VEHICLE, "BMW M4 Competition", 78000, 87,
        {"Marke": "BMW", "Modell": "M4 Competition", "Baujahr": 2022,
         "Kilometerstand": "18.000 km", "Zustand": "Neuwertig"},
        "Stuttgart",
    ),
    ComparableAsset(
        "vehicle-3", VEHICLE, "Porsche Cayenne Turbo", 92000, 90,
        {"Marke": "Porsche", "Modell": "Cayenne Turbo", "Baujahr": 2021,
         "Kilometerstand": "32.000 km", "Zustand": "Sehr gut"},
        "Hamburg",
    ),
    ComparableAsset(
        "vehicle-4", VEHICLE, "Mercedes-AMG GT 63 S", 105000, 88,
        {"Marke": "Mercedes-AMG", "Modell": "GT 63 S", "Baujahr": 2022,
         "Kilometerstand": "15.000 km", "Zustand": "Neuwertig"},
        "München",
    ),
    ComparableAsset(
        "vehicle-5", VEHICLE, "Audi RS6 Avant", 89000, 85,
        {"Marke": "Audi", "Modell": "RS6 Avant", "Baujahr": 2021,
         "Kilometerstand": "28.000 km", "Zustand": "Sehr gut"},
        "Frankfurt",
    ),
)


class StaticComparablePool:
    """Fixed in-memory pool. Defaults to the bundled reference comparables."""

    def __init__(self, assets: Optional[Iterable[ComparableAsset]] = None):
        grouped: Dict[AssetCategory, list] = {}
        for asset in REFERENCE_COMPARABLES if assets is None else assets:
            grouped.setdefault(asset.category, []).append(asset)
        self._by_category = {category: tuple(items) for category, items in grouped.items()}

    def candidates(self, category: AssetCategory) -> Sequence[ComparableAsset]:
        return self._by_category.get(category, ())
