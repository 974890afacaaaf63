"""Display-only fields for cafés that the map data does not carry.

Everything produced here is flavor text drawn from a random source on every
fetch. Pass a seeded :class:`random.Random` to pin the output in tests.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from .models import Amenities

DESCRIPTIONS = (
    "A cozy neighborhood cafe perfect for coffee lovers and casual meetings.",
    "Charming coffee shop with artisanal brews and a warm, welcoming atmosphere.",
    "Local favorite serving exceptional coffee and light bites in a relaxed setting.",
    "Trendy cafe offering specialty coffee drinks and a comfortable workspace.",
    "Family-owned coffee house with homemade pastries and friendly service.",
    "Modern coffee bar featuring locally roasted beans and creative beverages.",
    "Intimate cafe with a focus on quality coffee and community connection.",
    "Stylish coffee shop perfect for both work and leisure, with great ambiance.",
)

PRICE_RANGES = ("$", "$$", "$$$")

AREA_CODES = ("555", "123", "456", "789")

SPECIALTIES = (
    "Espresso", "Cappuccino", "Latte", "Americano", "Macchiato",
    "Cold Brew", "Iced Coffee", "Frappé", "Mocha", "Flat White",
    "Croissants", "Muffins", "Scones", "Bagels", "Sandwiches",
    "Salads", "Soups", "Pastries", "Cakes", "Cookies",
)

ATMOSPHERES = (
    "Cozy and intimate", "Modern and trendy", "Rustic and charming",
    "Bright and airy", "Quiet and peaceful", "Lively and social",
    "Industrial chic", "Bohemian and artistic", "Classic and elegant",
    "Casual and relaxed",
)

MIN_RATING = 3.5
MAX_RATING = 5.0
MIN_SPECIALTIES = 3
MAX_SPECIALTIES = 7


@dataclass(frozen=True, slots=True)
class Enrichment:
    description: str
    price_range: str
    rating: float
    phone: Optional[str]
    phone_is_synthetic: bool
    specialties: List[str]
    atmosphere: str


class Enricher:
    """Draw description, rating, price, specialties and atmosphere for a café."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def describe(self, amenities: Amenities) -> str:
        description = self._rng.choice(DESCRIPTIONS)
        features = []
        if amenities.wifi:
            features.append("Free WiFi available")
        if amenities.outdoor_seating:
            features.append("outdoor seating")
        if amenities.takeaway:
            features.append("takeaway options")
        if amenities.wheelchair:
            features.append("wheelchair accessible")
        if features:
            description += f" Features include {', '.join(features)}."
        return description

    def price_range(self) -> str:
        return self._rng.choice(PRICE_RANGES)

    def rating(self) -> float:
        value = round(MIN_RATING + self._rng.random() * (MAX_RATING - MIN_RATING), 1)
        return min(MAX_RATING, max(MIN_RATING, value))

    def phone(self) -> str:
        """Return a made-up ``(AAA) NNN-NNNN`` number."""

        area_code = self._rng.choice(AREA_CODES)
        number = str(self._rng.randint(1_000_000, 9_999_999))
        return f"({area_code}) {number[:3]}-{number[3:]}"

    def specialties(self) -> List[str]:
        count = self._rng.randint(MIN_SPECIALTIES, MAX_SPECIALTIES)
        shuffled = list(SPECIALTIES)
        self._rng.shuffle(shuffled)
        return shuffled[:count]

    def atmosphere(self) -> str:
        return self._rng.choice(ATMOSPHERES)

    def enrich(self, amenities: Amenities, phone: Optional[str] = None) -> Enrichment:
        """Draw every display field; a real ``phone`` is kept and never replaced."""

        synthetic = not phone
        return Enrichment(
            description=self.describe(amenities),
            price_range=self.price_range(),
            rating=self.rating(),
            phone=self.phone() if synthetic else phone,
            phone_is_synthetic=synthetic,
            specialties=self.specialties(),
            atmosphere=self.atmosphere(),
        )
