"""
Validated attribute maps, one pydantic model per asset category.

Every field is optional. Unknown keys are ignored and constraint violations
either reject the request (strict) or drop the offending field (lenient).
"""

import logging
from typing import Any, ClassVar, Dict, Literal, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ValuationRequestError
from ..models import AssetCategory


logger = logging.getLogger(__name__)


class AttributeMap(BaseModel):
    """Base for the per-category attribute models."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    category: ClassVar[AssetCategory]

    def to_dict(self) -> Dict[str, Any]:
        """Present fields only."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.to_dict()


class RealEstateAttributes(AttributeMap):
    category: ClassVar[AssetCategory] = AssetCategory.REAL_ESTATE

    area_sqm: Optional[float] = Field(default=None, gt=0, le=100_000)
    rooms: Optional[float] = Field(default=None, gt=0, le=100)
    floor: Optional[int] = Field(default=None, ge=-5, le=200)
    build_year: Optional[int] = Field(default=None, ge=1000, le=2100)
    city: Optional[str] = None
    location: Optional[str] = None
    location_tier: Optional[int] = Field(default=None, ge=1, le=3)
    property_type: Optional[Literal["apartment", "house", "penthouse", "villa"]] = None
    condition: Optional[Literal["new", "renovated", "good", "fair"]] = None
    energy_rating: Optional[str] = Field(default=None, max_length=3)
    has_balcony: Optional[bool] = None
    has_parking: Optional[bool] = None
    has_garden: Optional[bool] = None
    has_elevator: Optional[bool] = None


class WatchAttributes(AttributeMap):
    category: ClassVar[AssetCategory] = AssetCategory.WATCH

    brand: Optional[str] = None
    model: Optional[str] = None
    reference: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1800, le=2100)
    condition: Optional[Literal["mint", "very_good", "good", "fair"]] = None
    brand_tier: Optional[int] = Field(default=None, ge=1, le=3)
    has_box: Optional[bool] = None
    has_papers: Optional[bool] = None
    has_service_history: Optional[bool] = None
    is_limited_edition: Optional[bool] = None
    is_unpolished: Optional[bool] = None


class VehicleAttributes(AttributeMap):
    category: ClassVar[AssetCategory] = AssetCategory.VEHICLE

    brand: Optional[str] = None
    model: Optional[str] = None
    vehicle_type: Optional[Literal["sports_car", "convertible", "coupe", "suv", "sedan"]] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    first_registration: Optional[int] = Field(default=None, ge=1900, le=2100)
    mileage_km: Optional[int] = Field(default=None, ge=0, le=5_000_000)
    color: Optional[str] = None
    condition: Optional[Literal["excellent", "good", "used"]] = None
    previous_owners: Optional[int] = Field(default=None, ge=0, le=50)
    brand_tier: Optional[int] = Field(default=None, ge=1, le=3)
    is_accident_free: Optional[bool] = None
    has_service_book: Optional[bool] = None
    has_warranty: Optional[bool] = None


ATTRIBUTE_MODELS: Dict[AssetCategory, Type[AttributeMap]] = {
    AssetCategory.REAL_ESTATE: RealEstateAttributes,
    AssetCategory.WATCH: WatchAttributes,
    AssetCategory.VEHICLE: VehicleAttributes,
}


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ())) or "attributes"
    return f"{location}: {error.get('msg', 'invalid value')}"


def parse_attributes(category: AssetCategory, data: Any, strict: bool = True) -> AttributeMap:
    """
    Build the attribute model for a category.

    Args:
        category: Asset category selecting the model
        data: Mapping, attribute model or None
        strict: Raise ValuationRequestError on invalid fields instead of
            dropping them

    Returns:
        Validated attribute model (possibly empty)
    """
    model_cls = ATTRIBUTE_MODELS[category]

    if data is None:
        return model_cls()
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_none=True)
    if not isinstance(data, Mapping):
        if strict:
            raise ValuationRequestError(["attributes must be an object"])
        return model_cls()

    try:
        return model_cls.model_validate(dict(data))
    except ValidationError as exc:
        if strict:
            raise ValuationRequestError([_describe(e) for e in exc.errors()]) from exc
        invalid = {e["loc"][0] for e in exc.errors() if e.get("loc")}
        logger.debug("Discarding invalid %s fields: %s", category.value, sorted(map(str, invalid)))

    cleaned = {key: value for key, value in data.items() if key not in invalid}
    try:
        return model_cls.model_validate(cleaned)
    except ValidationError:
        logger.warning("Could not salvage %s attributes, returning empty map", category.value)
        return model_cls()


def merge_attributes(base: AttributeMap, overrides: AttributeMap) -> AttributeMap:
    """Overlay the present fields of ``overrides`` onto ``base``."""
    if type(base) is not type(overrides):
        raise ValueError("cannot merge attributes of different categories")
    return type(base).model_validate({**base.to_dict(), **overrides.to_dict()})
