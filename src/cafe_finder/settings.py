"""Configuration objects for the café finder."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
OVERPASS_URL = "https://overpass-api.de/api/interpreter"
DEFAULT_USER_AGENT = "cafe-finder/0.1.0"
DEFAULT_RADIUS_METERS = 2000
RADIUS_CHOICES = (500, 1000, 2000, 5000)
DEFAULT_FAVORITES_PATH = Path.home() / ".cafe_finder" / "favorites.json"


def _from_mapping(cls, data: Optional[Mapping[str, Any]]):
    """Build a settings object from ``data``, ignoring unknown keys."""

    if not data:
        return cls()
    known = {f.name for f in fields(cls)}
    return cls(**{key: value for key, value in data.items() if key in known})


@dataclass(slots=True)
class GeocodeSettings:
    """Settings used to resolve place names and coordinates."""

    base_url: str = NOMINATIM_BASE_URL
    search_path: str = "/search"
    reverse_path: str = "/reverse"
    email: Optional[str] = None
    timeout: int = 30
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def search_url(self) -> str:
        return self.base_url.rstrip("/") + self.search_path

    @property
    def reverse_url(self) -> str:
        return self.base_url.rstrip("/") + self.reverse_path

    def query_params(self, query: str) -> Dict[str, str]:
        params = {"format": "json", "q": query, "limit": "1", "addressdetails": "1"}
        if self.email:
            params["email"] = self.email
        return params

    def reverse_params(self, lat: float, lng: float) -> Dict[str, str]:
        params = {"format": "json", "lat": str(lat), "lon": str(lng), "addressdetails": "1"}
        if self.email:
            params["email"] = self.email
        return params

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GeocodeSettings":
        return _from_mapping(cls, data)


@dataclass(slots=True)
class OverpassSettings:
    """Settings for the Overpass point-of-interest query."""

    url: str = OVERPASS_URL
    # Server-side processing bound, sent inside the query itself.
    query_timeout: int = 25
    request_timeout: int = 30
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "OverpassSettings":
        return _from_mapping(cls, data)


@dataclass(slots=True)
class GeolocationSettings:
    """Accuracy contract requested from a geolocation provider."""

    high_accuracy: bool = True
    timeout_seconds: float = 10.0
    maximum_age_seconds: float = 300.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "GeolocationSettings":
        return _from_mapping(cls, data)


@dataclass(slots=True)
class FilterSettings:
    """User-selected filters; ``radius`` drives the fetch, the rest are post filters."""

    radius: int = DEFAULT_RADIUS_METERS
    open_now: bool = False
    wifi: bool = False
    outdoor: bool = False
    takeaway: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "FilterSettings":
        return _from_mapping(cls, data)


@dataclass(slots=True)
class FinderSettings:
    """Composite settings structure for a café finder session."""

    geocode: GeocodeSettings = field(default_factory=GeocodeSettings)
    overpass: OverpassSettings = field(default_factory=OverpassSettings)
    geolocation: GeolocationSettings = field(default_factory=GeolocationSettings)
    filters: FilterSettings = field(default_factory=FilterSettings)
    favorites_path: Path = DEFAULT_FAVORITES_PATH

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "FinderSettings":
        data = data or {}
        favorites_path = data.get("favorites_path")
        return cls(
            geocode=GeocodeSettings.from_mapping(data.get("geocode")),
            overpass=OverpassSettings.from_mapping(data.get("overpass")),
            geolocation=GeolocationSettings.from_mapping(data.get("geolocation")),
            filters=FilterSettings.from_mapping(data.get("filters")),
            favorites_path=Path(favorites_path).expanduser() if favorites_path else DEFAULT_FAVORITES_PATH,
        )


def default_output_fields() -> Iterable[str]:
    """Return the column names used when exporting to CSV."""

    return [
        "id",
        "name",
        "address",
        "phone",
        "phone_is_synthetic",
        "website",
        "email",
        "lat",
        "lng",
        "distance",
        "opening_hours",
        "is_open",
        "wifi",
        "outdoor_seating",
        "takeaway",
        "wheelchair",
        "tags",
        "cuisine",
        "rating",
        "price_range",
        "atmosphere",
        "specialties",
        "description",
    ]
