"""Geographic point and service-area models.

A service area is a closed tagged variant on ``type``. Each variant
validates its own payload on construction, so a record that is missing
a required field for its type never becomes a ``ServiceArea``.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from geoserv.utils import normalize_weekday, normalize_zip_code

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


class ServiceAreaType(str, Enum):
    RADIUS = "RADIUS"
    POLYGON = "POLYGON"
    ZIP = "ZIP"


class GeoPoint(BaseModel):
    """A WGS84 coordinate in degrees."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)

    def as_lng_lat(self) -> tuple[float, float]:
        """Vertex ordering used by persisted polygon rings."""
        return self.lng, self.lat


class _ServiceAreaBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, allow_inf_nan=False)

    id: Optional[str] = None
    name: Optional[str] = None
    available_days: Optional[tuple[str, ...]] = Field(default=None, alias="availableDays")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return None if value is None else str(value)

    @field_validator("available_days", mode="before")
    @classmethod
    def _normalize_days(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, _COLLECTION_TYPES):
            return value
        days: list[str] = []
        for raw in value:
            label = normalize_weekday(raw) if isinstance(raw, str) else None
            if label and label not in days:
                days.append(label)
        return tuple(days)

    @property
    def allowed_weekdays(self) -> frozenset[str]:
        """Weekday labels this area is served on. Empty when none are configured."""
        return frozenset(self.available_days or ())


class RadiusArea(_ServiceAreaBase):
    """Circle around a centre point."""

    type: Literal["RADIUS"] = "RADIUS"
    center_lat: float = Field(alias="centerLat", ge=-90, le=90)
    center_lng: float = Field(alias="centerLng", ge=-180, le=180)
    radius_km: float = Field(alias="radiusKm", gt=0)

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(lat=self.center_lat, lng=self.center_lng)


class PolygonArea(_ServiceAreaBase):
    """Outer ring plus optional holes, vertices stored as ``(lng, lat)``."""

    type: Literal["POLYGON"] = "POLYGON"
    rings: tuple[tuple[tuple[float, float], ...], ...] = Field(alias="polygon")

    @field_validator("rings", mode="before")
    @classmethod
    def _extract_rings(cls, value: Any) -> Any:
        # Imported here so geoserv.geo can depend on this module.
        from geoserv.geo.geometry import extract_polygon_rings

        rings = extract_polygon_rings(value)
        if rings is None:
            raise ValueError("polygon payload is malformed")
        return rings

    def to_geojson(self) -> dict[str, Any]:
        """GeoJSON Polygon geometry with ``[lng, lat]`` vertices."""
        return {
            "type": "Polygon",
            "coordinates": [[[lng, lat] for lng, lat in ring] for ring in self.rings],
        }


class ZipArea(_ServiceAreaBase):
    """Set of postal codes."""

    type: Literal["ZIP"] = "ZIP"
    zip_codes: frozenset[str] = Field(default_factory=frozenset, alias="zipCodes")

    @field_validator("zip_codes", mode="before")
    @classmethod
    def _flatten_entries(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, _COLLECTION_TYPES):
            return value
        codes = set()
        for entry in value:
            code = _zip_entry_code(entry)
            if code:
                codes.add(code)
        return frozenset(codes)


ServiceArea = Annotated[
    Union[RadiusArea, PolygonArea, ZipArea],
    Field(discriminator="type"),
]

_AREA_ADAPTER: TypeAdapter[Any] = TypeAdapter(ServiceArea)

# Attribute names read from ORM-style rows.
_RECORD_ATTRIBUTES = (
    "id", "name", "type", "availableDays", "available_days",
    "centerLat", "center_lat", "centerLng", "center_lng", "radiusKm", "radius_km",
    "polygon", "zipCodes", "zip_codes",
)


def _zip_entry_code(entry: Any) -> Optional[str]:
    if isinstance(entry, str):
        code = entry
    elif isinstance(entry, Mapping):
        code = entry.get("zipCode", entry.get("zip_code"))
    else:
        code = getattr(entry, "zipCode", getattr(entry, "zip_code", None))
    if not isinstance(code, str):
        return None
    return normalize_zip_code(code) or None


def _area_type(value: Any) -> Optional[ServiceAreaType]:
    # ORM rows may hand back an enum member instead of its string value.
    raw = getattr(value, "value", value)
    if not isinstance(raw, str):
        return None
    try:
        return ServiceAreaType(raw.strip().upper())
    except ValueError:
        return None


def _record_to_mapping(record: Any) -> Optional[dict[str, Any]]:
    if isinstance(record, BaseModel):
        return record.model_dump()
    if isinstance(record, Mapping):
        return dict(record)
    data = {
        attr: getattr(record, attr)
        for attr in _RECORD_ATTRIBUTES
        if getattr(record, attr, None) is not None
    }
    return data or None


def parse_service_area(record: Any) -> Optional[Union[RadiusArea, PolygonArea, ZipArea]]:
    """Build the typed variant for a persisted service-area record.

    Accepts typed variants, mappings (snake_case or camelCase keys) and
    attribute objects such as ORM rows. Returns None when the record has an
    unknown type or lacks a valid payload for its type.
    """
    if isinstance(record, (RadiusArea, PolygonArea, ZipArea)):
        return record
    if record is None:
        return None

    data = _record_to_mapping(record)
    if data is None:
        return None

    area_type = _area_type(data.get("type"))
    if area_type is None:
        logger.debug("Skipping service area %s: unknown type %r", data.get("id"), data.get("type"))
        return None
    data["type"] = area_type.value

    try:
        return _AREA_ADAPTER.validate_python(data)
    except ValidationError as exc:
        logger.debug(
            "Skipping service area %s: %d validation error(s)",
            data.get("id"),
            exc.error_count(),
        )
        return None


def iter_service_areas(
    records: Iterable[Any],
) -> Iterable[Union[RadiusArea, PolygonArea, ZipArea]]:
    """Yield the parseable areas from a collection of records, in order."""
    for record in records:
        area = parse_service_area(record)
        if area is not None:
            yield area
