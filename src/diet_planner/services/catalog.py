"""Food catalog access with snapshot caching."""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Protocol

from diet_planner.domain.foods import CatalogSnapshot, FoodItem, MealTemplate
from diet_planner.services.cache import Cache

_CACHE_KEY = "catalog:snapshot"
UNCATEGORIZED = "uncategorized"

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Read interface for reference food data."""

    def list_foods(self) -> list[FoodItem]:
        """Return every catalog food ordered by name."""

    def list_meal_templates(self) -> list[MealTemplate]:
        """Return the configured meal templates."""


@dataclass
class CatalogService:
    """Loads the catalog as an immutable snapshot."""

    repository: CatalogRepository
    cache: Cache
    ttl_seconds: int = 300

    def get_snapshot(self) -> CatalogSnapshot:
        """Return the cached snapshot, loading it when missing or expired."""
        cached = self.cache.get(_CACHE_KEY)
        if isinstance(cached, CatalogSnapshot):
            return cached
        snapshot = CatalogSnapshot(
            foods=tuple(self.repository.list_foods()),
            templates=tuple(self.repository.list_meal_templates()),
        )
        self.cache.set(_CACHE_KEY, snapshot, ttl_seconds=self.ttl_seconds)
        _logger.info(
            "Catalog loaded: foods=%s templates=%s",
            len(snapshot.foods),
            len(snapshot.templates),
        )
        return snapshot

    def refresh(self) -> CatalogSnapshot:
        """Drop the cached snapshot and reload it."""
        self.cache.invalidate(_CACHE_KEY)
        return self.get_snapshot()

    def sub_category_counts(self) -> dict[str, int]:
        """Return the number of foods per sub-category."""
        counts = Counter(
            food.sub_category or UNCATEGORIZED for food in self.get_snapshot().foods
        )
        return dict(sorted(counts.items()))
