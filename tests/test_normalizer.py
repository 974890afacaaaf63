import pytest

from cafe_finder.models import Amenities, GeoPoint, RawPoiElement
from cafe_finder.normalizer import display_tags, extract_amenities, format_address, normalize


def _raw(**tags):
    return RawPoiElement(id=1, point=GeoPoint(10.0, 20.0), tags=tags)


def test_unrecognized_tags_default_everything():
    fields = normalize(_raw(foo="bar", amenity="cafe"))
    assert fields.amenities == Amenities()
    assert all(value is False for value in fields.amenities.as_dict().values())
    assert len(fields.amenities.as_dict()) == 8
    assert fields.is_open is None
    assert fields.address is None
    assert fields.name == "Unnamed Café"
    assert fields.cuisine == "coffee"
    assert fields.tags == []


@pytest.mark.parametrize(
    "tags",
    [{"internet_access": "wlan"}, {"wifi": "yes"}, {"internet_access:fee": "no"}],
)
def test_wifi_sources(tags):
    assert extract_amenities(tags).wifi is True


def test_flags_require_exact_yes():
    amenities = extract_amenities(
        {"outdoor_seating": "Yes", "takeaway": "only", "wheelchair": "limited", "delivery": "no", "reservation": "yes"}
    )
    assert amenities.outdoor_seating is False
    assert amenities.takeaway is False
    assert amenities.wheelchair is False
    assert amenities.delivery is False
    assert amenities.reservation is True


@pytest.mark.parametrize("value,expected", [("yes", True), ("outside", True), ("no", False), ("isolated", False)])
def test_smoking(value, expected):
    assert extract_amenities({"smoking": value}).smoking is expected


def test_parking_from_fee_tag():
    assert extract_amenities({"parking:fee": "no"}).parking is True
    assert extract_amenities({"parking": "yes"}).parking is True
    assert extract_amenities({"parking:fee": "yes"}).parking is False


@pytest.mark.parametrize(
    "hours,expected",
    [("24/7", True), ("Mo-Fr 08:00-18:00", None), ("24/7; PH off", None), ("off", None)],
)
def test_open_state(hours, expected):
    assert normalize(_raw(opening_hours=hours)).is_open is expected


def test_missing_hours_is_unknown():
    fields = normalize(_raw(name="Brew"))
    assert fields.opening_hours is None
    assert fields.is_open is None


def test_address_order_and_gaps():
    tags = {"addr:street": "Rue de Rivoli", "addr:postcode": "75001", "addr:housenumber": "12"}
    assert format_address(tags) == "12, Rue de Rivoli, 75001"
    assert format_address({"addr:city": "Paris"}) == "Paris"


def test_display_tags_precedence():
    tags = {
        "wheelchair": "yes",
        "takeaway": "yes",
        "wifi": "yes",
        "outdoor_seating": "yes",
        "cuisine": "coffee_shop",
    }
    assert display_tags(tags) == ["coffee_shop", "outdoor seating", "wifi", "takeaway", "wheelchair accessible"]


def test_free_internet_fee_gives_wifi_amenity_but_no_tag():
    fields = normalize(_raw(**{"internet_access:fee": "no"}))
    assert fields.amenities.wifi is True
    assert "wifi" not in fields.tags


def test_contact_fields_pass_through():
    fields = normalize(_raw(name="Brew", phone="+33 1 23 45 67 89", website="https://brew.example", email="hi@brew.example"))
    assert fields.phone == "+33 1 23 45 67 89"
    assert fields.website == "https://brew.example"
    assert fields.email == "hi@brew.example"
    assert (fields.lat, fields.lng) == (10.0, 20.0)
