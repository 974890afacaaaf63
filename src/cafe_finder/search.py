"""In-memory search and filtering over an already fetched café list."""

from __future__ import annotations

from typing import List, Sequence

from .models import Cafe
from .settings import FilterSettings


def _matches(cafe: Cafe, term: str) -> bool:
    if term in cafe.name.lower():
        return True
    if cafe.description and term in cafe.description.lower():
        return True
    if any(term in specialty.lower() for specialty in cafe.specialties):
        return True
    return any(term in tag.lower() for tag in cafe.tags)


def filter_by_name(cafes: Sequence[Cafe], term: str) -> Sequence[Cafe]:
    """Return the cafés whose name, description, specialties or tags contain ``term``.

    Matching is case-insensitive. A blank term returns ``cafes`` itself.
    """

    if not term or not term.strip():
        return cafes
    needle = term.strip().lower()
    return [cafe for cafe in cafes if _matches(cafe, needle)]


def apply_filters(cafes: Sequence[Cafe], filters: FilterSettings) -> List[Cafe]:
    """Keep the cafés satisfying every enabled filter, in their original order."""

    result = list(cafes)
    if filters.open_now:
        result = [cafe for cafe in result if cafe.is_open is True]
    if filters.wifi:
        result = [cafe for cafe in result if cafe.amenities.wifi]
    if filters.outdoor:
        result = [cafe for cafe in result if cafe.amenities.outdoor_seating]
    if filters.takeaway:
        result = [cafe for cafe in result if cafe.amenities.takeaway]
    return result
