"""Geocoding helpers for place names and coordinates."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import InvalidInputError, NotFoundError, ServiceError
from .geo import format_coordinates
from .models import GeoPoint, ResolvedLocation
from .settings import GeocodeSettings

logger = logging.getLogger(__name__)

SERVICE_NAME = "Nominatim"


class NominatimGeocoder:
    """Thin wrapper around the public Nominatim API."""

    def __init__(
        self,
        settings: Optional[GeocodeSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or GeocodeSettings()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.settings.user_agent, "Accept": "application/json"})

    def _get_json(self, url: str, params: Dict[str, str]) -> Any:
        logger.debug("Requesting %s with %s", url, params)
        try:
            response = self._session.get(url, params=params, timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise ServiceError(SERVICE_NAME, str(exc), status_code=status) from exc
        except requests.RequestException as exc:
            raise ServiceError(SERVICE_NAME, str(exc)) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(SERVICE_NAME, "response is not valid JSON") from exc

    def geocode(self, query: str) -> ResolvedLocation:
        """Resolve ``query`` to the single best matching location."""

        if not query or not query.strip():
            raise InvalidInputError("Search query must not be empty")
        query = query.strip()
        items = self._get_json(self.settings.search_url, self.settings.query_params(query))
        if not isinstance(items, list):
            raise ServiceError(SERVICE_NAME, "expected a list of candidates")
        if not items:
            raise NotFoundError(query)
        item = items[0]
        try:
            latitude = float(item["lat"])
            longitude = float(item["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ServiceError(SERVICE_NAME, "candidate has no usable coordinates") from exc
        try:
            location = ResolvedLocation(
                lat=latitude,
                lng=longitude,
                display_name=item.get("display_name") or query,
                address=item.get("address"),
            )
        except InvalidInputError as exc:
            raise ServiceError(SERVICE_NAME, str(exc)) from exc
        logger.info("Geocoded %r -> %s", query, location.display_name)
        return location

    def reverse(self, point: GeoPoint) -> ResolvedLocation:
        """Return the display name and address for ``point``."""

        data = self._get_json(self.settings.reverse_url, self.settings.reverse_params(point.lat, point.lng))
        if not isinstance(data, dict) or "error" in data:
            raise ServiceError(SERVICE_NAME, "reverse lookup returned no address")
        return ResolvedLocation(
            lat=point.lat,
            lng=point.lng,
            display_name=data.get("display_name") or format_coordinates(point),
            address=data.get("address"),
        )


def locate_point(point: GeoPoint, geocoder: NominatimGeocoder) -> ResolvedLocation:
    """Label ``point`` via reverse geocoding, falling back to its coordinates."""

    try:
        return geocoder.reverse(point)
    except ServiceError:
        logger.warning("Reverse geocoding failed for %s", format_coordinates(point), exc_info=True)
        return ResolvedLocation(lat=point.lat, lng=point.lng, display_name=format_coordinates(point))
