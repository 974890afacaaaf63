"""Data models used throughout the café finder."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from geopy.point import Point

from .errors import InvalidInputError

UNNAMED_CAFE = "Unnamed Café"
DEFAULT_CUISINE = "coffee"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A WGS84 coordinate pair; construction fails outside the valid ranges."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not isinstance(self.lat, (int, float)) or not -90.0 <= self.lat <= 90.0:
            raise InvalidInputError(f"Latitude must be within [-90, 90], got {self.lat!r}")
        if not isinstance(self.lng, (int, float)) or not -180.0 <= self.lng <= 180.0:
            raise InvalidInputError(f"Longitude must be within [-180, 180], got {self.lng!r}")

    @classmethod
    def parse(cls, text: str) -> "GeoPoint":
        """Parse human coordinate text such as ``"48.8566, 2.3522"``."""

        if not text or not text.strip():
            raise InvalidInputError("Coordinates must not be empty")
        try:
            point = Point(text.strip())
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Could not parse coordinates {text!r}: {exc}") from exc
        return cls(lat=point.latitude, lng=point.longitude)

    @property
    def point(self) -> "GeoPoint":
        return GeoPoint(lat=self.lat, lng=self.lng)


@dataclass(frozen=True, slots=True)
class ResolvedLocation(GeoPoint):
    """A geocoded point with its human-readable label."""

    display_name: str = ""
    address: Optional[Mapping[str, str]] = field(default=None, compare=False)


@dataclass(frozen=True, slots=True)
class RawPoiElement:
    """A single element as returned by the point-of-interest service."""

    id: int
    point: GeoPoint
    tags: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, element: Mapping[str, Any]) -> "RawPoiElement":
        """Build an element from the service payload; raises ``ValueError`` when malformed."""

        try:
            lat = float(element["lat"])
            lng = float(element["lon"])
            element_id = int(element["id"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed element {element!r}") from exc
        if not math.isfinite(lat) or not math.isfinite(lng):
            raise ValueError(f"Non-finite coordinates in element {element_id}")
        tags = element.get("tags") or {}
        if not isinstance(tags, Mapping):
            raise ValueError(f"Tags of element {element_id} are not a mapping")
        return cls(
            id=element_id,
            point=GeoPoint(lat=lat, lng=lng),
            tags={str(key): str(value) for key, value in tags.items()},
        )


@dataclass(frozen=True, slots=True)
class Amenities:
    """Boolean amenity flags; every flag is always present."""

    wifi: bool = False
    outdoor_seating: bool = False
    takeaway: bool = False
    wheelchair: bool = False
    smoking: bool = False
    parking: bool = False
    delivery: bool = False
    reservation: bool = False

    def as_dict(self) -> Dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Cafe:
    """Normalized, enriched representation of a café near a search center."""

    id: int
    name: str
    lat: float
    lng: float
    distance: int
    address: Optional[str] = None
    phone: Optional[str] = None
    phone_is_synthetic: bool = False
    website: Optional[str] = None
    email: Optional[str] = None
    opening_hours: Optional[str] = None
    is_open: Optional[bool] = None
    amenities: Amenities = field(default_factory=Amenities)
    tags: List[str] = field(default_factory=list)
    cuisine: str = DEFAULT_CUISINE
    rating: Optional[float] = None
    price_range: Optional[str] = None
    description: Optional[str] = None
    specialties: List[str] = field(default_factory=list)
    atmosphere: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary."""

        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Cafe":
        """Rebuild a café from :meth:`as_dict` output, ignoring unknown keys."""

        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        amenities = values.get("amenities")
        if isinstance(amenities, Mapping):
            amenity_keys = {f.name for f in fields(Amenities)}
            values["amenities"] = Amenities(**{k: bool(v) for k, v in amenities.items() if k in amenity_keys})
        values["tags"] = list(values.get("tags") or [])
        values["specialties"] = list(values.get("specialties") or [])
        return cls(**values)

    def as_row(self) -> List[str]:
        """Return the café as a CSV row using primitive types."""

        return [
            str(self.id),
            self.name,
            self.address or "",
            self.phone or "",
            "yes" if self.phone_is_synthetic else "no",
            self.website or "",
            self.email or "",
            f"{self.lat:.6f}",
            f"{self.lng:.6f}",
            str(self.distance),
            self.opening_hours or "",
            "" if self.is_open is None else ("yes" if self.is_open else "no"),
            "yes" if self.amenities.wifi else "no",
            "yes" if self.amenities.outdoor_seating else "no",
            "yes" if self.amenities.takeaway else "no",
            "yes" if self.amenities.wheelchair else "no",
            ";".join(self.tags),
            self.cuisine,
            "" if self.rating is None else f"{self.rating:.1f}",
            self.price_range or "",
            self.atmosphere or "",
            ";".join(self.specialties),
            self.description or "",
        ]
