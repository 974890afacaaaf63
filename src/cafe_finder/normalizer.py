"""Map raw point-of-interest tags onto café fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from .models import DEFAULT_CUISINE, UNNAMED_CAFE, Amenities, RawPoiElement

ALWAYS_OPEN = "24/7"
ADDRESS_KEYS = ("addr:housenumber", "addr:street", "addr:city", "addr:postcode")


@dataclass(frozen=True, slots=True)
class NormalizedTags:
    """Café fields that can be derived from tags alone."""

    id: int
    name: str
    lat: float
    lng: float
    address: Optional[str]
    phone: Optional[str]
    website: Optional[str]
    email: Optional[str]
    opening_hours: Optional[str]
    is_open: Optional[bool]
    amenities: Amenities
    tags: List[str] = field(default_factory=list)
    cuisine: str = DEFAULT_CUISINE


def _yes(tags: Mapping[str, str], key: str) -> bool:
    return tags.get(key) == "yes"


def extract_amenities(tags: Mapping[str, str]) -> Amenities:
    return Amenities(
        wifi=(
            tags.get("internet_access") == "wlan"
            or _yes(tags, "wifi")
            or tags.get("internet_access:fee") == "no"
        ),
        outdoor_seating=_yes(tags, "outdoor_seating"),
        takeaway=_yes(tags, "takeaway"),
        wheelchair=_yes(tags, "wheelchair"),
        smoking=tags.get("smoking") in ("yes", "outside"),
        parking=_yes(tags, "parking") or tags.get("parking:fee") == "no",
        delivery=_yes(tags, "delivery"),
        reservation=_yes(tags, "reservation"),
    )


def open_state(opening_hours: Optional[str]) -> Optional[bool]:
    """Return ``True`` for always-open places and ``None`` (unknown) otherwise.

    Weekly schedules are not evaluated; any hours string other than ``24/7``
    is reported as unknown rather than guessed.
    """

    if opening_hours == ALWAYS_OPEN:
        return True
    return None


def format_address(tags: Mapping[str, str]) -> Optional[str]:
    parts = [tags[key] for key in ADDRESS_KEYS if tags.get(key)]
    return ", ".join(parts) if parts else None


def display_tags(tags: Mapping[str, str]) -> List[str]:
    """Return display tags in fixed order: cuisine, outdoor, wifi, takeaway, wheelchair."""

    result: List[str] = []
    if tags.get("cuisine"):
        result.append(tags["cuisine"])
    if _yes(tags, "outdoor_seating"):
        result.append("outdoor seating")
    if tags.get("internet_access") == "wlan" or _yes(tags, "wifi"):
        result.append("wifi")
    if _yes(tags, "takeaway"):
        result.append("takeaway")
    if _yes(tags, "wheelchair"):
        result.append("wheelchair accessible")
    return result


def normalize(raw: RawPoiElement) -> NormalizedTags:
    """Derive the tag-backed café fields of ``raw``; never fails."""

    tags = raw.tags
    opening_hours = tags.get("opening_hours") or None
    return NormalizedTags(
        id=raw.id,
        name=tags.get("name") or UNNAMED_CAFE,
        lat=raw.point.lat,
        lng=raw.point.lng,
        address=format_address(tags),
        phone=tags.get("phone") or None,
        website=tags.get("website") or None,
        email=tags.get("email") or None,
        opening_hours=opening_hours,
        is_open=open_state(opening_hours),
        amenities=extract_amenities(tags),
        tags=display_tags(tags),
        cuisine=tags.get("cuisine") or DEFAULT_CUISINE,
    )
