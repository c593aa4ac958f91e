"""
System prompts for delegated attribute extraction.
"""

import json

from ..models import AssetCategory


BASE_PROMPT = (
    "Du bist ein Experte für Asset-Bewertungen. Parse die Beschreibung und "
    "extrahiere strukturierte Daten als JSON-Objekt. Verwende ausschließlich "
    "die unten genannten Feldnamen und setze unbekannte Werte auf null."
)

EXAMPLES = {
    AssetCategory.REAL_ESTATE: {
        "area_sqm": 90,
        "rooms": 3,
        "location": "München, Schwabing",
        "city": "München",
        "property_type": "apartment",
        "condition": "renovated",
        "floor": 2,
        "has_balcony": True,
        "has_parking": False,
        "build_year": None,
        "energy_rating": None,
    },
    AssetCategory.WATCH: {
        "brand": "Rolex",
        "model": "Submariner",
        "reference": "116610LN",
        "year": 2018,
        "condition": "very_good",
        "has_box": True,
        "has_papers": True,
        "has_service_history": False,
        "is_limited_edition": False,
        "is_unpolished": False,
        "brand_tier": 1,
    },
    AssetCategory.VEHICLE: {
        "brand": "Porsche",
        "model": "911 Carrera S",
        "vehicle_type": "sports_car",
        "year": 2021,
        "first_registration": 2021,
        "mileage_km": 15000,
        "color": "schwarz",
        "condition": "excellent",
        "previous_owners": 1,
        "is_accident_free": True,
        "has_service_book": True,
        "has_warranty": False,
        "brand_tier": 1,
    },
}

RULES = {
    AssetCategory.REAL_ESTATE: (
        '- property_type: "apartment", "house", "penthouse", "villa"\n'
        '- condition: "new", "renovated", "good", "fair"\n'
        "- Zahlen für area_sqm, rooms, floor, build_year\n"
        "- Booleans für has_balcony, has_parking, has_garden, has_elevator"
    ),
    AssetCategory.WATCH: (
        '- condition: "mint", "very_good", "good", "fair"\n'
        "- brand_tier: 1 (Rolex, Patek Philippe, Audemars Piguet), "
        "2 (Omega, IWC, Cartier), 3 (andere)\n"
        "- year als vierstellige Jahreszahl"
    ),
    AssetCategory.VEHICLE: (
        '- vehicle_type: "sports_car", "convertible", "coupe", "suv", "sedan"\n'
        '- condition: "excellent", "good", "used"\n'
        "- brand_tier: 1 (Ferrari, Lamborghini, Porsche), 2 (Mercedes, BMW, Audi), 3 (andere)\n"
        "- mileage_km als ganze Zahl ohne Tausenderpunkte"
    ),
}


def system_prompt(category: AssetCategory) -> str:
    """Fixed per-category prompt: field names, enumerations and one example."""
    example = json.dumps(EXAMPLES[category], ensure_ascii=False, indent=2)
    return f"{BASE_PROMPT}\n\nBeispiel Output:\n{example}\n\nWichtig:\n{RULES[category]}\n"
