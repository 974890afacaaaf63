from unittest.mock import MagicMock

import pytest
import requests

from cafe_finder.errors import InvalidInputError, NotFoundError, ServiceError
from cafe_finder.geocode import NominatimGeocoder, locate_point
from cafe_finder.models import GeoPoint
from cafe_finder.settings import GeocodeSettings

from conftest import json_response


def _http_error(status):
    response = MagicMock()
    response.status_code = status
    failing = MagicMock()
    failing.raise_for_status.side_effect = requests.HTTPError(f"{status} Server Error", response=response)
    return failing


def test_geocode_returns_first_candidate(session):
    session.get.return_value = json_response(
        [
            {"lat": "48.8566", "lon": "2.3522", "display_name": "Paris, France", "address": {"city": "Paris"}},
            {"lat": "33.66", "lon": "-95.55", "display_name": "Paris, Texas"},
        ]
    )
    location = NominatimGeocoder(session=session).geocode("Paris")

    assert location.lat == pytest.approx(48.8566)
    assert location.lng == pytest.approx(2.3522)
    assert location.display_name == "Paris, France"
    assert location.address == {"city": "Paris"}


def test_geocode_requests_one_match_with_address_details(session):
    session.get.return_value = json_response([{"lat": "1", "lon": "2", "display_name": "X"}])
    NominatimGeocoder(GeocodeSettings(email="me@example.com"), session=session).geocode("  Café de Flore, Paris ")

    url = session.get.call_args.args[0]
    params = session.get.call_args.kwargs["params"]
    assert url == "https://nominatim.openstreetmap.org/search"
    assert params["q"] == "Café de Flore, Paris"
    assert params["limit"] == "1"
    assert params["addressdetails"] == "1"
    assert params["format"] == "json"
    assert params["email"] == "me@example.com"
    assert session.get.call_args.kwargs["timeout"] == 30


def test_query_is_percent_encoded_on_the_wire():
    prepared = requests.Request(
        "GET",
        GeocodeSettings().search_url,
        params=GeocodeSettings().query_params("Café & Co"),
    ).prepare()
    assert "q=Caf%C3%A9+%26+Co" in prepared.url


@pytest.mark.parametrize("query", ["", "   "])
def test_empty_query_is_rejected(session, query):
    with pytest.raises(InvalidInputError):
        NominatimGeocoder(session=session).geocode(query)
    session.get.assert_not_called()


def test_no_candidates_raises_not_found(session):
    session.get.return_value = json_response([])
    with pytest.raises(NotFoundError) as excinfo:
        NominatimGeocoder(session=session).geocode("zzzqqq123")
    assert excinfo.value.query == "zzzqqq123"


def test_http_failure_raises_service_error(session):
    session.get.return_value = _http_error(503)
    with pytest.raises(ServiceError) as excinfo:
        NominatimGeocoder(session=session).geocode("Paris")
    assert excinfo.value.status_code == 503


def test_timeout_raises_service_error(session):
    session.get.side_effect = requests.Timeout("read timed out")
    with pytest.raises(ServiceError):
        NominatimGeocoder(session=session).geocode("Paris")


def test_candidate_without_coordinates_is_a_service_error(session):
    session.get.return_value = json_response([{"display_name": "Nowhere"}])
    with pytest.raises(ServiceError):
        NominatimGeocoder(session=session).geocode("Nowhere")


def test_reverse_returns_label(session):
    session.get.return_value = json_response({"display_name": "Somewhere", "address": {"road": "Main St"}})
    location = NominatimGeocoder(session=session).reverse(GeoPoint(48.8566, 2.3522))

    assert location.display_name == "Somewhere"
    assert location.address == {"road": "Main St"}
    params = session.get.call_args.kwargs["params"]
    assert params["lat"] == "48.8566"
    assert params["lon"] == "2.3522"


def test_reverse_failure_raises_service_error(session):
    session.get.return_value = _http_error(500)
    with pytest.raises(ServiceError):
        NominatimGeocoder(session=session).reverse(GeoPoint(1.0, 2.0))


def test_locate_point_falls_back_to_coordinates(session):
    session.get.return_value = _http_error(500)
    location = locate_point(GeoPoint(48.856613, 2.352222), NominatimGeocoder(session=session))

    assert location.display_name == "48.8566, 2.3522"
    assert location.address is None
