"""
Region detection and premium-location tables.
"""

from typing import Optional


# Ordered: the first key found in the location string wins, so a string
# naming several cities resolves to whichever comes first here.
CITY_TO_REGION = (
    ("münchen", "München"),
    ("hamburg", "Hamburg"),
    ("berlin", "Berlin"),
    ("frankfurt", "Frankfurt"),
    ("stuttgart", "Stuttgart"),
    ("düsseldorf", "Düsseldorf"),
    ("köln", "Köln"),
    ("leipzig", "Leipzig"),
    ("dresden", "Dresden"),
)

# Regions treated as premium when aggregated listings are available
PREMIUM_REGIONS = frozenset({"München", "Hamburg", "Berlin"})

# Localities treated as premium by the heuristic fallback
PREMIUM_LOCALITIES = ("münchen", "hamburg", "starnberg", "grünwald")


def detect_region(location: Optional[str]) -> Optional[str]:
    """Region for the first dictionary key that is a substring of ``location``."""
    if not location:
        return None
    lower = location.lower()
    for key, region in CITY_TO_REGION:
        if key in lower:
            return region
    return None


def is_premium_locality(location: Optional[str]) -> bool:
    if not location:
        return False
    lower = location.lower()
    return any(name in lower for name in PREMIUM_LOCALITIES)
