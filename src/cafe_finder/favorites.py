"""Persistent favorites kept as a JSON list of cafés."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from .models import Cafe
from .settings import DEFAULT_FAVORITES_PATH

logger = logging.getLogger(__name__)


class FavoritesStore:
    """Favorite cafés keyed by id, saved to ``path`` after every change."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path else DEFAULT_FAVORITES_PATH
        self._favorites: List[Cafe] = []

    @property
    def favorites(self) -> List[Cafe]:
        return list(self._favorites)

    @property
    def count(self) -> int:
        return len(self._favorites)

    def load(self) -> List[Cafe]:
        """Read favorites from disk; a missing or unreadable file starts empty."""

        if not self.path.exists():
            self._favorites = []
            return self.favorites
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
            if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
                raise ValueError("favorites file must hold a list of café objects")
            self._favorites = [Cafe.from_dict(item) for item in data]
        except (OSError, ValueError, TypeError):
            logger.warning("Could not load favorites from %s", self.path, exc_info=True)
            self._favorites = []
        logger.debug("Loaded %d favorites from %s", len(self._favorites), self.path)
        return self.favorites

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump([cafe.as_dict() for cafe in self._favorites], handle, ensure_ascii=False, indent=2)

    def is_favorite(self, cafe_id: int) -> bool:
        return any(cafe.id == cafe_id for cafe in self._favorites)

    def add(self, cafe: Cafe) -> None:
        if self.is_favorite(cafe.id):
            return
        self._favorites.append(cafe)
        self.save()

    def remove(self, cafe_id: int) -> None:
        self._favorites = [cafe for cafe in self._favorites if cafe.id != cafe_id]
        self.save()

    def toggle(self, cafe: Cafe) -> bool:
        """Add or remove ``cafe``; return whether it is now a favorite."""

        if self.is_favorite(cafe.id):
            self.remove(cafe.id)
            return False
        self.add(cafe)
        return True

    def clear(self) -> None:
        self._favorites = []
        self.save()
