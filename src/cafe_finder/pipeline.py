"""Search session tying geocoding, café lookup and filtering together."""

from __future__ import annotations

import csv
import json
import logging
import threading
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Iterable, List, Optional

from .errors import InvalidInputError
from .fetcher import OverpassCafeFetcher
from .geocode import NominatimGeocoder, locate_point
from .geolocation import GeolocationProvider
from .models import Cafe, GeoPoint, ResolvedLocation
from .search import apply_filters, filter_by_name
from .settings import FilterSettings, FinderSettings, default_output_fields

logger = logging.getLogger(__name__)

_FILTER_NAMES = frozenset(f.name for f in fields(FilterSettings))


@dataclass(slots=True)
class SearchOutcome:
    """What a search produced; ``stale`` results were superseded and not applied."""

    cafes: List[Cafe] = field(default_factory=list)
    location: Optional[ResolvedLocation] = None
    message: Optional[str] = None
    stale: bool = False


class CafeFinder:
    """Keeps the state of one search session.

    ``all_cafes`` holds the full result of the latest fetch and ``cafes`` the
    subset currently shown. Every search takes a new generation number; when a
    newer search has started by the time a response arrives, the older response
    is returned marked ``stale`` and the session state is left untouched.
    """

    def __init__(
        self,
        settings: Optional[FinderSettings] = None,
        geocoder: Optional[NominatimGeocoder] = None,
        fetcher: Optional[OverpassCafeFetcher] = None,
    ) -> None:
        self.settings = settings or FinderSettings()
        self.geocoder = geocoder or NominatimGeocoder(self.settings.geocode)
        self.fetcher = fetcher or OverpassCafeFetcher(self.settings.overpass)
        self.filters: FilterSettings = replace(self.settings.filters)
        self.location: Optional[ResolvedLocation] = None
        self.user_location: Optional[GeoPoint] = None
        self.all_cafes: List[Cafe] = []
        self.cafes: List[Cafe] = []
        self._generation = 0
        self._lock = threading.Lock()

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _commit(
        self,
        generation: int,
        location: ResolvedLocation,
        found: List[Cafe],
        user_location: Optional[GeoPoint] = None,
    ) -> SearchOutcome:
        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale results for %s", location.display_name)
                return SearchOutcome(cafes=found, location=location, stale=True)
            self.location = location
            if user_location is not None:
                self.user_location = user_location
            self.all_cafes = found
            self.cafes = apply_filters(found, self.filters)
        return SearchOutcome(cafes=self.cafes, location=location, message=self._empty_message())

    def _empty_message(self) -> Optional[str]:
        if not self.all_cafes:
            label = self.location.display_name if self.location else "this location"
            return f"No cafés found within {self.filters.radius}m of {label}."
        if not self.cafes:
            return "No cafés match the selected filters."
        return None

    def _fetch(
        self, generation: int, location: ResolvedLocation, user_location: Optional[GeoPoint] = None
    ) -> SearchOutcome:
        found = self.fetcher.find_nearby(location.point, self.filters.radius)
        return self._commit(generation, location, found, user_location)

    def search_location(self, query: str) -> SearchOutcome:
        """Geocode ``query`` and find cafés around it."""

        generation = self._begin()
        location = self.geocoder.geocode(query)
        return self._fetch(generation, location)

    def search_near_me(self, provider: GeolocationProvider) -> SearchOutcome:
        """Find cafés around the provider's position.

        A failed reverse lookup only changes the label to the raw coordinates.
        """

        generation = self._begin()
        point = provider.current_position(self.settings.geolocation)
        location = locate_point(point, self.geocoder)
        return self._fetch(generation, location, user_location=point)

    def search_by_name(self, term: str) -> SearchOutcome:
        """Search the cafés of the latest fetch by name, description, specialty or tag."""

        if self.location is None:
            raise InvalidInputError("Please search for a location first to find cafes in that area.")
        self.cafes = list(filter_by_name(self.all_cafes, term))
        message = None
        if not self.cafes:
            message = f'No cafes found matching "{term}"'
        return SearchOutcome(cafes=self.cafes, location=self.location, message=message)

    def update_filter(self, name: str, value: Any) -> SearchOutcome:
        """Change one filter; a new radius triggers a fresh fetch."""

        if name not in _FILTER_NAMES:
            raise InvalidInputError(f"Unknown filter {name!r}")
        if name == "radius":
            try:
                value = int(value)
            except (TypeError, ValueError) as exc:
                raise InvalidInputError(f"Radius must be an integer, got {value!r}") from exc
            if value <= 0:
                raise InvalidInputError(f"Radius must be positive, got {value}")
        else:
            value = bool(value)
        setattr(self.filters, name, value)
        if self.location is None:
            return SearchOutcome()
        if name == "radius":
            return self._fetch(self._begin(), self.location)
        self.cafes = apply_filters(self.all_cafes, self.filters)
        return SearchOutcome(cafes=self.cafes, location=self.location, message=self._empty_message())

    def reset_filters(self) -> SearchOutcome:
        self.filters = FilterSettings()
        if self.location is None:
            return SearchOutcome()
        return self._fetch(self._begin(), self.location)


def write_to_csv(cafes: Iterable[Cafe], path: str | Path) -> None:
    """Persist cafés to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0

    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(default_output_fields())
        for cafe in cafes:
            writer.writerow(cafe.as_row())
            count += 1

    logger.info("Wrote %d rows to %s", count, path)


def write_to_json(cafes: Iterable[Cafe], path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = [cafe.as_dict() for cafe in cafes]
    with path.open("w", encoding="utf-8") as handle:
        json.dump(data, handle, ensure_ascii=False, indent=2)
    logger.info("Wrote %d cafés to %s", len(data), path)
