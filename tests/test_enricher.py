import random
import re

from cafe_finder.enricher import ATMOSPHERES, DESCRIPTIONS, SPECIALTIES, Enricher
from cafe_finder.models import Amenities

PHONE_RE = re.compile(r"^\((555|123|456|789)\) \d{3}-\d{4}$")


def test_same_seed_gives_same_output():
    first = Enricher(random.Random(3)).enrich(Amenities(wifi=True))
    second = Enricher(random.Random(3)).enrich(Amenities(wifi=True))
    assert first == second


def test_generated_values_stay_in_range():
    enricher = Enricher(random.Random(11))
    for _ in range(500):
        extra = enricher.enrich(Amenities())
        assert 3.5 <= extra.rating <= 5.0
        assert round(extra.rating, 1) == extra.rating
        assert extra.price_range in ("$", "$$", "$$$")
        assert 3 <= len(extra.specialties) <= 7
        assert len(set(extra.specialties)) == len(extra.specialties)
        assert set(extra.specialties) <= set(SPECIALTIES)
        assert extra.atmosphere in ATMOSPHERES
        assert PHONE_RE.match(extra.phone)
        assert extra.phone_is_synthetic is True


def test_real_phone_is_kept():
    extra = Enricher(random.Random(1)).enrich(Amenities(), phone="+45 33 12 34 56")
    assert extra.phone == "+45 33 12 34 56"
    assert extra.phone_is_synthetic is False


def test_description_lists_features_in_order():
    amenities = Amenities(wheelchair=True, wifi=True, takeaway=True, outdoor_seating=True)
    description = Enricher(random.Random(5)).describe(amenities)
    assert description.endswith(
        " Features include Free WiFi available, outdoor seating, takeaway options, wheelchair accessible."
    )
    assert any(description.startswith(template) for template in DESCRIPTIONS)


def test_description_without_features_is_a_template():
    assert Enricher(random.Random(5)).describe(Amenities()) in DESCRIPTIONS


def test_vocabulary_is_not_reordered():
    before = list(SPECIALTIES)
    Enricher(random.Random(2)).specialties()
    assert list(SPECIALTIES) == before
