"""Exceptions raised by the café finder."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class CafeFinderError(Exception):
    """Base class for all café finder failures."""


class InvalidInputError(CafeFinderError, ValueError):
    """Raised for empty queries, bad radii and unusable coordinates."""


class NotFoundError(CafeFinderError):
    """Raised when the geocoder has no match for a query."""

    def __init__(self, query: str) -> None:
        super().__init__(f"Location not found: {query!r}")
        self.query = query


class ServiceError(CafeFinderError):
    """Raised when a remote service fails or answers with an unusable payload."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None) -> None:
        detail = f"{service} failed: {message}"
        if status_code is not None:
            detail = f"{detail} (HTTP {status_code})"
        super().__init__(detail)
        self.service = service
        self.status_code = status_code


class GeolocationFailure(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


_GEOLOCATION_MESSAGES = {
    GeolocationFailure.PERMISSION_DENIED: "Location access denied. Please allow location access.",
    GeolocationFailure.POSITION_UNAVAILABLE: "Location unavailable. Please check your location settings.",
    GeolocationFailure.TIMEOUT: "Location request timed out.",
}
_UNKNOWN_GEOLOCATION_MESSAGE = "An unknown error occurred while getting your location."


class GeolocationError(CafeFinderError):
    """Raised by a geolocation provider; ``failure`` is ``None`` for unknown causes."""

    def __init__(self, failure: Optional[GeolocationFailure]) -> None:
        super().__init__(_GEOLOCATION_MESSAGES.get(failure, _UNKNOWN_GEOLOCATION_MESSAGE))
        self.failure = failure


def geolocation_error(code: int) -> GeolocationError:
    """Map a provider error code (1, 2 or 3) to a :class:`GeolocationError`."""

    try:
        failure: Optional[GeolocationFailure] = GeolocationFailure(code)
    except ValueError:
        failure = None
    return GeolocationError(failure)
