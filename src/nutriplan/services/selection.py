"""Candidate recipe selection for a single meal slot."""

import logging
import math
import random
from collections.abc import Set as AbstractSet
from dataclasses import dataclass, field
from typing import Protocol

from nutriplan.domain.errors import NoCandidateRecipeError
from nutriplan.domain.recipes import MealType, Recipe
from nutriplan.services.cache import Cache
from nutriplan.services.plan_config import CALORIE_TOLERANCE, search_meal_type

_logger = logging.getLogger(__name__)


class RecipeCatalog(Protocol):
    """Read access to the recipe catalog."""

    def fetch_candidates(
        self, meal_type: MealType, min_calories: int, max_calories: int
    ) -> list[Recipe]:
        """Return recipes for a meal type with total calories in the band."""


def calorie_band(target: float, tolerance: float) -> tuple[int, int]:
    """Return the integer catalog bounds around a calorie target."""
    # Strip float noise (509.9999...) before taking integer bounds.
    return (
        math.floor(round(target * (1 - tolerance), 6)),
        math.ceil(round(target * (1 + tolerance), 6)),
    )


@dataclass
class CandidateRecipeSelector:
    """Pick a random recipe for a slot, preferring ones not used today."""

    catalog: RecipeCatalog
    rng: random.Random = field(default_factory=random.Random)
    tolerance: float = CALORIE_TOLERANCE
    cache: Cache | None = None
    cache_ttl_seconds: int = 600
    debug: bool = False

    def select(
        self,
        meal_type: MealType,
        calorie_target: float,
        used_recipe_ids: AbstractSet[int] = frozenset(),
        tolerance: float | None = None,
    ) -> Recipe:
        """Return a recipe within ``calorie_target`` +/- tolerance.

        Recipes already used today are skipped unless nothing else fits.
        Raises NoCandidateRecipeError when the band holds no recipe at all.
        """
        min_calories, max_calories = calorie_band(
            calorie_target, self.tolerance if tolerance is None else tolerance
        )
        search_type = search_meal_type(meal_type)
        candidates = self._fetch(search_type, min_calories, max_calories)
        if not candidates:
            raise NoCandidateRecipeError(meal_type, min_calories, max_calories)

        fresh = [recipe for recipe in candidates if recipe.id not in used_recipe_ids]
        pool = fresh or candidates
        chosen = self.rng.choice(pool)
        if self.debug:
            _logger.info(
                "Selected recipe %s for %s (%s-%s kcal, %s candidates, %s fresh)",
                chosen.id,
                meal_type,
                min_calories,
                max_calories,
                len(candidates),
                len(fresh),
            )
        return chosen

    def _fetch(
        self, meal_type: MealType, min_calories: int, max_calories: int
    ) -> list[Recipe]:
        if self.cache is None:
            return self.catalog.fetch_candidates(meal_type, min_calories, max_calories)
        cache_key = f"recipes:{meal_type}:{min_calories}:{max_calories}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached
        recipes = self.catalog.fetch_candidates(meal_type, min_calories, max_calories)
        self.cache.set(cache_key, recipes, ttl_seconds=self.cache_ttl_seconds)
        return recipes
