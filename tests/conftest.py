import math
import random
from unittest.mock import MagicMock

import pytest

from cafe_finder.enricher import Enricher
from cafe_finder.fetcher import OverpassCafeFetcher
from cafe_finder.geo import EARTH_RADIUS_METERS
from cafe_finder.models import Amenities, Cafe, GeoPoint

PARIS = GeoPoint(lat=48.8566, lng=2.3522)
METERS_PER_DEGREE = EARTH_RADIUS_METERS * math.pi / 180


def json_response(payload):
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    return response


def element_north_of(center, element_id, meters, **tags):
    """Return an Overpass node ``meters`` due north of ``center``."""
    return {
        "type": "node",
        "id": element_id,
        "lat": center.lat + meters / METERS_PER_DEGREE,
        "lon": center.lng,
        "tags": tags,
    }


def mock_session():
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def session():
    return mock_session()


@pytest.fixture
def fetcher(session):
    return OverpassCafeFetcher(enricher=Enricher(random.Random(7)), session=session)


@pytest.fixture
def make_cafe():
    def _make(cafe_id, name="Cafe", distance=100, **overrides):
        values = {
            "id": cafe_id,
            "name": name,
            "lat": PARIS.lat,
            "lng": PARIS.lng,
            "distance": distance,
            "amenities": Amenities(),
        }
        values.update(overrides)
        return Cafe(**values)

    return _make
