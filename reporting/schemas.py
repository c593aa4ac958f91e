"""
Fixed report content for the ASSERO valuation report.

Label dictionaries, methodology paragraphs, market factors and the legal
disclaimer. Everything here is static text; the generator only selects.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.models import AssetCategory, DemandStatus, SeasonalImpact, TrendDirection
from utils.formatting import format_number


BRAND_NAME = "ASSERO"
REPORT_SUBTITLE = "Asset Valuation Report"
FOOTER_TEXT = "© ASSERO - Asset Valuation Platform"


# =============================================================================
# Attribute Labels
# =============================================================================

CATEGORY_LABELS = {
    AssetCategory.REAL_ESTATE: "Immobilie",
    AssetCategory.WATCH: "Luxusuhr",
    AssetCategory.VEHICLE: "Fahrzeug",
}

PROPERTY_TYPE_LABELS = {
    "apartment": "Wohnung",
    "house": "Haus",
    "penthouse": "Penthouse",
    "villa": "Villa",
}

REAL_ESTATE_CONDITION_LABELS = {
    "new": "Neubau",
    "renovated": "Renoviert",
    "good": "Gut",
    "fair": "Renovierungsbedürftig",
}

WATCH_CONDITION_LABELS = {
    "mint": "Neuwertig (Mint)",
    "very_good": "Sehr gut",
    "good": "Gut",
    "fair": "Gebraucht",
}

VEHICLE_TYPE_LABELS = {
    "sports_car": "Sportwagen",
    "convertible": "Cabrio",
    "coupe": "Coupé",
    "suv": "SUV",
    "sedan": "Limousine",
}

VEHICLE_CONDITION_LABELS = {
    "excellent": "Neuwertig",
    "good": "Gut",
    "used": "Gebraucht",
}


def _text(value: Any) -> str:
    return str(value)


def _yes(value: Any) -> str:
    return "Ja"


def _mapped(labels: Dict[str, str]) -> Callable[[Any], str]:
    return lambda value: labels.get(value, str(value).replace("_", " ").capitalize())


def _area(value: float) -> str:
    return f"{format_number(value)} m²"


def _km(value: int) -> str:
    return f"{format_number(value, 0)} km"


def _tier(value: int) -> str:
    return f"Tier {value}"


@dataclass(frozen=True)
class AttributeLabel:
    field: str
    label: str
    render: Callable[[Any], str] = _text


ATTRIBUTE_LABELS: Dict[AssetCategory, Tuple[AttributeLabel, ...]] = {
    AssetCategory.REAL_ESTATE: (
        AttributeLabel("location", "Standort"),
        AttributeLabel("city", "Stadt"),
        AttributeLabel("property_type", "Immobilientyp", _mapped(PROPERTY_TYPE_LABELS)),
        AttributeLabel("area_sqm", "Wohnfläche", _area),
        AttributeLabel("rooms", "Zimmer", format_number),
        AttributeLabel("build_year", "Baujahr"),
        AttributeLabel("condition", "Zustand", _mapped(REAL_ESTATE_CONDITION_LABELS)),
        AttributeLabel("floor", "Etage"),
        AttributeLabel("energy_rating", "Energieausweis"),
        AttributeLabel("location_tier", "Lagequalität", _tier),
        AttributeLabel("has_balcony", "Balkon/Terrasse", _yes),
        AttributeLabel("has_parking", "Stellplatz", _yes),
        AttributeLabel("has_garden", "Garten", _yes),
        AttributeLabel("has_elevator", "Aufzug", _yes),
    ),
    AssetCategory.WATCH: (
        AttributeLabel("brand", "Marke"),
        AttributeLabel("model", "Modell"),
        AttributeLabel("reference", "Referenznummer"),
        AttributeLabel("year", "Herstellungsjahr"),
        AttributeLabel("condition", "Zustand", _mapped(WATCH_CONDITION_LABELS)),
        AttributeLabel("brand_tier", "Markensegment", _tier),
        AttributeLabel("has_box", "Originalbox", _yes),
        AttributeLabel("has_papers", "Papiere", _yes),
        AttributeLabel("has_service_history", "Service-Historie", _yes),
        AttributeLabel("is_limited_edition", "Limited Edition", _yes),
        AttributeLabel("is_unpolished", "Unpoliert", _yes),
    ),
    AssetCategory.VEHICLE: (
        AttributeLabel("brand", "Marke"),
        AttributeLabel("model", "Modell"),
        AttributeLabel("vehicle_type", "Fahrzeugtyp", _mapped(VEHICLE_TYPE_LABELS)),
        AttributeLabel("year", "Baujahr"),
        AttributeLabel("first_registration", "Erstzulassung"),
        AttributeLabel("mileage_km", "Laufleistung", _km),
        AttributeLabel("color", "Farbe", lambda value: str(value).capitalize()),
        AttributeLabel("condition", "Zustand", _mapped(VEHICLE_CONDITION_LABELS)),
        AttributeLabel("previous_owners", "Vorbesitzer"),
        AttributeLabel("brand_tier", "Markensegment", _tier),
        AttributeLabel("is_accident_free", "Unfallfrei", _yes),
        AttributeLabel("has_service_book", "Scheckheftgepflegt", _yes),
        AttributeLabel("has_warranty", "Garantie", _yes),
    ),
}


def is_blank(value: Any) -> bool:
    """Absent, empty-string, zero or False values are never rendered."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (int, float)):
        return value == 0
    return False


def attribute_rows(category: AssetCategory, attributes: Dict[str, Any]) -> List[Tuple[str, str]]:
    """(label, display value) rows in dictionary order, blanks omitted."""
    rows = []
    for entry in ATTRIBUTE_LABELS[category]:
        value = attributes.get(entry.field)
        if is_blank(value):
            continue
        rows.append((entry.label, entry.render(value)))
    return rows


# =============================================================================
# Fixed Text Blocks
# =============================================================================

METHODOLOGY = {
    AssetCategory.REAL_ESTATE: (
        "Die Immobilienbewertung erfolgt anhand der Vergleichswertmethode, bei der ähnliche "
        "Objekte in vergleichbarer Lage herangezogen werden. Berücksichtigt werden Faktoren wie "
        "Wohnfläche, Zimmeranzahl, Baujahr, Zustand, Lage sowie Ausstattungsmerkmale. Zusätzlich "
        "fließen aktuelle Marktdaten und regionale Preisentwicklungen in die Bewertung ein."
    ),
    AssetCategory.WATCH: (
        "Die Bewertung von Luxusuhren basiert auf einer Kombination aus Markenwert, "
        "Modellbeliebtheit, Zustand, Alter und Verfügbarkeit. Besonderer Fokus liegt auf der "
        "Vollständigkeit der Dokumentation (Box, Papiere, Service-Historie) sowie "
        "Seltenheitsfaktoren wie limitierte Editionen. Marktpreise werden kontinuierlich aus "
        "internationalen Handelsplattformen und Auktionshäusern aktualisiert."
    ),
    AssetCategory.VEHICLE: (
        "Die Fahrzeugbewertung erfolgt unter Berücksichtigung von Marke, Modell, Baujahr, "
        "Laufleistung, Zustand und Ausstattung. Ein besonderes Augenmerk liegt auf der "
        "Fahrzeughistorie (Unfallfreiheit, Scheckheft, Vorbesitzer) sowie regionalen "
        "Preisunterschieden. Die Bewertung basiert auf aktuellen Marktdaten aus "
        "Gebrauchtwagenportalen und Händlerpreisen."
    ),
}

MARKET_FACTORS = (
    "Aktuelle Marktpreise und Transaktionsdaten",
    "Asset-spezifische Eigenschaften und Zustand",
    "Geografische Lage und regionale Markttrends",
    "Angebots- und Nachfragesituation",
    "Saisonale Schwankungen und Marktzyklen",
    "Vergleichbare Assets (Comparable Sales Method)",
)

DISCLAIMER_TITLE = "Wichtiger Hinweis"
DISCLAIMER = (
    "Diese Bewertung wurde algorithmisch erstellt und basiert auf aktuellen Marktdaten, "
    "vergleichbaren Assets und den von Ihnen angegebenen Informationen. Sie dient ausschließlich "
    "zu Informationszwecken und stellt keine verbindliche Wertermittlung dar. Für rechtlich "
    "bindende Bewertungen konsultieren Sie bitte einen zertifizierten Gutachter oder "
    "Sachverständigen. ASSERO übernimmt keine Haftung für Entscheidungen, die auf Basis dieser "
    "Bewertung getroffen werden."
)


# =============================================================================
# Market Context Labels
# =============================================================================

TREND_LABELS = {
    TrendDirection.UP: "Steigend",
    TrendDirection.STABLE: "Stabil",
    TrendDirection.DOWN: "Fallend",
}

DEMAND_LABELS = {
    DemandStatus.HIGH: "Hoch",
    DemandStatus.MEDIUM: "Mittel",
    DemandStatus.LOW: "Niedrig",
}

SEASONAL_LABELS = {
    SeasonalImpact.POSITIVE: "Positiv",
    SeasonalImpact.NEUTRAL: "Neutral",
    SeasonalImpact.NEGATIVE: "Negativ",
}

DATA_SOURCE_NOTES = {
    "database": "Berechnet aus aktiven Inseraten der Region",
    "estimated": "Geschätzt auf Basis von Branchendaten",
}


def report_title(category: AssetCategory, attributes: Dict[str, Any]) -> str:
    """Document title from the most identifying attributes available."""
    if category == AssetCategory.REAL_ESTATE:
        kind = PROPERTY_TYPE_LABELS.get(attributes.get("property_type"), "Immobilie")
        place: Optional[str] = attributes.get("location") or attributes.get("city")
        return f"{kind} in {place}" if place else kind
    name = " ".join(v for v in (attributes.get("brand"), attributes.get("model")) if v)
    return name or CATEGORY_LABELS[category]
