"""HTTP client for finding cafés through the Overpass API."""

from __future__ import annotations

import logging
import math
from typing import Any, Iterator, List, Optional

import requests

from .enricher import Enricher
from .errors import InvalidInputError, ServiceError
from .geo import distance_meters
from .models import Cafe, GeoPoint, RawPoiElement
from .normalizer import normalize
from .settings import OverpassSettings

logger = logging.getLogger(__name__)

SERVICE_NAME = "Overpass"

# Café amenity, coffee shops and other venues whose cuisine or bar tag mentions coffee.
CAFE_SELECTORS = (
    '["amenity"="cafe"]',
    '["amenity"="restaurant"]["cuisine"~"coffee"]',
    '["shop"="coffee"]',
    '["amenity"="fast_food"]["cuisine"~"coffee"]',
    '["amenity"="bar"]["bar"~"coffee"]',
)


def build_query(center: GeoPoint, radius: int, timeout: int) -> str:
    """Return the Overpass QL query for cafés within ``radius`` meters of ``center``."""

    around = f"(around:{radius},{center.lat:.7f},{center.lng:.7f})"
    lines = [f"[out:json][timeout:{timeout}];", "("]
    lines.extend(f"  node{selector}{around};" for selector in CAFE_SELECTORS)
    lines.extend([");", "out body;"])
    return "\n".join(lines)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class OverpassCafeFetcher:
    """Fetch and assemble cafés around a point using ``requests``."""

    def __init__(
        self,
        settings: Optional[OverpassSettings] = None,
        enricher: Optional[Enricher] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or OverpassSettings()
        self.enricher = enricher or Enricher()
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.settings.user_agent})

    def fetch_elements(self, center: GeoPoint, radius: int) -> List[RawPoiElement]:
        """Run the spatial query and return the raw elements."""

        if isinstance(radius, bool) or not isinstance(radius, int) or radius <= 0:
            raise InvalidInputError(f"Radius must be a positive integer, got {radius!r}")
        query = build_query(center, radius, self.settings.query_timeout)
        logger.debug("Querying %s within %dm of %s,%s", self.settings.url, radius, center.lat, center.lng)
        try:
            response = self._session.post(
                self.settings.url,
                data={"data": query},
                timeout=self.settings.request_timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise ServiceError(SERVICE_NAME, str(exc), status_code=status) from exc
        except requests.RequestException as exc:
            raise ServiceError(SERVICE_NAME, str(exc)) from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise ServiceError(SERVICE_NAME, "response is not valid JSON") from exc
        if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
            raise ServiceError(SERVICE_NAME, "response has no element list")
        return list(self._iter_elements(payload["elements"]))

    def _iter_elements(self, elements: List[Any]) -> Iterator[RawPoiElement]:
        for element in elements:
            if not isinstance(element, dict):
                raise ServiceError(SERVICE_NAME, f"unexpected element {element!r}")
            try:
                yield RawPoiElement.from_json(element)
            except ValueError:
                logger.warning("Skipping element without usable coordinates: %s", element.get("id"))

    def build_cafe(self, center: GeoPoint, raw: RawPoiElement) -> Cafe:
        """Normalize, enrich and measure a single element."""

        fields = normalize(raw)
        extra = self.enricher.enrich(fields.amenities, phone=fields.phone)
        return Cafe(
            id=fields.id,
            name=fields.name,
            lat=fields.lat,
            lng=fields.lng,
            distance=round_half_up(distance_meters(center, raw.point)),
            address=fields.address,
            phone=extra.phone,
            phone_is_synthetic=extra.phone_is_synthetic,
            website=fields.website,
            email=fields.email,
            opening_hours=fields.opening_hours,
            is_open=fields.is_open,
            amenities=fields.amenities,
            tags=fields.tags,
            cuisine=fields.cuisine,
            rating=extra.rating,
            price_range=extra.price_range,
            description=extra.description,
            specialties=extra.specialties,
            atmosphere=extra.atmosphere,
        )

    def find_nearby(self, center: GeoPoint, radius: int) -> List[Cafe]:
        """Return cafés within ``radius`` meters of ``center``, nearest first."""

        elements = self.fetch_elements(center, radius)
        cafes = [self.build_cafe(center, raw) for raw in elements]
        # sorted() is stable, so equal distances keep the service order.
        cafes = sorted(cafes, key=lambda cafe: cafe.distance)
        logger.info("Found %d cafés within %dm", len(cafes), radius)
        return cafes
