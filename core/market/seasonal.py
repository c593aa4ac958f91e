"""
Seasonal market impact by quarter.
"""

from datetime import date

from ..models import AssetCategory, SeasonalContext, SeasonalImpact


GERMAN_MONTHS = (
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
)

POSITIVE = SeasonalImpact.POSITIVE
NEUTRAL = SeasonalImpact.NEUTRAL
NEGATIVE = SeasonalImpact.NEGATIVE

# quarter -> (impact, description)
SEASONAL_TABLE = {
    AssetCategory.REAL_ESTATE: {
        1: (NEUTRAL, "Winter: Traditionell ruhigere Phase im Immobilienmarkt."),
        2: (POSITIVE, "Frühjahr ist traditionell die stärkste Kaufsaison für Immobilien."),
        3: (POSITIVE, "Sommerzeit zeigt anhaltend hohe Aktivität im Immobilienmarkt."),
        4: (NEUTRAL, "Herbst: Käufer wollen vor Jahresende abschließen."),
    },
    AssetCategory.WATCH: {
        1: (NEGATIVE, "Nach den Feiertagen normalerweise ruhigere Marktphase."),
        2: (NEUTRAL, "Stabile Nachfrage im Luxusuhrensegment."),
        3: (NEUTRAL, "Stabile Nachfrage im Luxusuhrensegment."),
        4: (POSITIVE, "Q4 zeigt traditionell höchste Nachfrage (Weihnachtsgeschäft, Jahresboni)."),
    },
    AssetCategory.VEHICLE: {
        1: (NEUTRAL, "Standard-Nachfrage im Premiumfahrzeugmarkt."),
        2: (POSITIVE, "Frühjahr: Hauptsaison für Fahrzeugkäufe (Neuregistrierungen)."),
        3: (NEUTRAL, "Standard-Nachfrage im Premiumfahrzeugmarkt."),
        4: (POSITIVE, "Herbst: Zweite Hauptsaison vor Jahreswechsel."),
    },
}


def quarter_of(day: date) -> int:
    return (day.month - 1) // 3 + 1


def seasonal_context(category: AssetCategory, day: date) -> SeasonalContext:
    impact, description = SEASONAL_TABLE[category][quarter_of(day)]
    return SeasonalContext(
        current_month=GERMAN_MONTHS[day.month - 1],
        impact=impact,
        description=description,
    )
