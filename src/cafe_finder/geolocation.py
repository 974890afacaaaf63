"""Sources of the user's current position."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .errors import GeolocationFailure, GeolocationError
from .models import GeoPoint
from .settings import GeolocationSettings

logger = logging.getLogger(__name__)


class GeolocationProvider(Protocol):
    def current_position(self, settings: GeolocationSettings) -> GeoPoint:
        """Return the current position or raise :class:`GeolocationError`."""


class FixedPositionProvider:
    """Report a position supplied up front, e.g. from the command line."""

    def __init__(self, point: Optional[GeoPoint]) -> None:
        self.point = point

    def current_position(self, settings: GeolocationSettings) -> GeoPoint:
        if self.point is None:
            raise GeolocationError(GeolocationFailure.POSITION_UNAVAILABLE)
        logger.debug(
            "Using fixed position %s,%s (high_accuracy=%s)",
            self.point.lat,
            self.point.lng,
            settings.high_accuracy,
        )
        return self.point
