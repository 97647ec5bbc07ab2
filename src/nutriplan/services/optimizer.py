"""Single-pass corrective scaling of one day's meals.

Calories are checked first. When the day exceeds its calorie target, the
scalable ingredient with the most calories is trimmed. Otherwise the macro
furthest above 105% of its target is trimmed at its largest scalable source.
At most one override is produced per day, never moving an ingredient more
than 20% away from its base amount.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from functools import partial

from nutriplan.domain.plans import DayAggregate, IngredientOverride, PlannedMeal
from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import Ingredient, Recipe
from nutriplan.services.macros import (
    INGREDIENT_ROUNDING_STEP,
    MAX_INGREDIENT_CHANGE_PERCENT,
    aggregate_day,
    calculate_macro_surplus,
    calculate_recipe_macros,
    find_macro_for_optimization,
    ingredient_macro,
    round_ingredient_amount,
)

_logger = logging.getLogger(__name__)

_EPSILON = 1e-9


@dataclass(frozen=True)
class _Target:
    meal_index: int
    ingredient: Ingredient


@dataclass
class MacroOptimizer:
    """Trims one scalable ingredient when a day overshoots its targets."""

    max_change_percent: float = MAX_INGREDIENT_CHANGE_PERCENT
    debug: bool = False

    def optimize(
        self,
        day_meals: Sequence[PlannedMeal],
        recipes: Sequence[Recipe],
        targets: NutritionTargets,
    ) -> list[PlannedMeal]:
        """Return the day's meals, at most one of them with a new override."""
        by_id = {recipe.id: recipe for recipe in recipes}
        missing = {meal.recipe_id for meal in day_meals} - by_id.keys()
        if missing:
            raise ValueError(f"Recipes missing for planned meals: {sorted(missing)}")
        meal_recipes = [by_id[meal.recipe_id] for meal in day_meals]
        aggregate = self.day_aggregate(day_meals, meal_recipes)

        if aggregate.calories > targets.target_calories:
            surplus = aggregate.calories - targets.target_calories
            contribution: Callable[[Ingredient], float] = _ingredient_calories
            reason = f"calories +{surplus:.0f} kcal"
        else:
            macro = find_macro_for_optimization(aggregate, targets)
            if macro is None:
                return list(day_meals)
            surplus = calculate_macro_surplus(aggregate, targets)[macro]
            contribution = partial(ingredient_macro, macro=macro)
            reason = f"{macro} +{surplus:.1f} g"

        target = _largest_scalable(day_meals, meal_recipes, contribution)
        if target is None:
            return list(day_meals)
        override = self._override(
            target.ingredient, surplus, contribution(target.ingredient)
        )
        if override is None:
            return list(day_meals)
        if self.debug:
            _logger.info(
                "Optimizer %s: ingredient %s %.0f -> %.0f in meal %s",
                reason,
                override.ingredient_id,
                target.ingredient.base_amount,
                override.new_amount,
                day_meals[target.meal_index].meal_type,
            )
        return _with_override(day_meals, target.meal_index, override)

    def day_aggregate(
        self, day_meals: Sequence[PlannedMeal], meal_recipes: Sequence[Recipe]
    ) -> DayAggregate:
        """Sum macros over the day's meals, honouring existing overrides."""
        return aggregate_day(
            [
                calculate_recipe_macros(recipe, meal.ingredient_overrides)
                for meal, recipe in zip(day_meals, meal_recipes, strict=True)
            ]
        )

    def _override(
        self, ingredient: Ingredient, surplus: float, contribution: float
    ) -> IngredientOverride | None:
        """Remove ``surplus`` units supplied at ``contribution`` per base amount."""
        per_unit = contribution / ingredient.base_amount
        max_reduction = ingredient.base_amount * self.max_change_percent
        reduction = min(surplus / per_unit, max_reduction)
        new_amount = round_ingredient_amount(ingredient.base_amount - reduction)
        lower_bound = ingredient.base_amount - max_reduction
        if new_amount < lower_bound - _EPSILON:
            step = INGREDIENT_ROUNDING_STEP
            new_amount = float(math.ceil(lower_bound / step - _EPSILON) * step)
        if new_amount >= ingredient.base_amount:
            return None
        return IngredientOverride(
            ingredient_id=ingredient.id, new_amount=new_amount, auto_adjusted=True
        )


def _largest_scalable(
    day_meals: Sequence[PlannedMeal],
    meal_recipes: Sequence[Recipe],
    contribution: Callable[[Ingredient], float],
) -> _Target | None:
    """Return the scalable ingredient contributing most, first one on ties."""
    best: _Target | None = None
    best_value = 0.0
    for index, (meal, recipe) in enumerate(zip(day_meals, meal_recipes, strict=True)):
        overridden = {
            override.ingredient_id for override in meal.ingredient_overrides or []
        }
        for ingredient in recipe.ingredients:
            if not ingredient.is_scalable or ingredient.base_amount <= 0:
                continue
            if ingredient.id in overridden:
                continue
            value = contribution(ingredient)
            if value > best_value:
                best = _Target(meal_index=index, ingredient=ingredient)
                best_value = value
    return best


def _with_override(
    day_meals: Sequence[PlannedMeal], meal_index: int, override: IngredientOverride
) -> list[PlannedMeal]:
    meals = list(day_meals)
    meal = meals[meal_index]
    kept = [
        existing
        for existing in meal.ingredient_overrides or []
        if existing.ingredient_id != override.ingredient_id
    ]
    meals[meal_index] = replace(meal, ingredient_overrides=[*kept, override])
    return meals


def _ingredient_calories(ingredient: Ingredient) -> float:
    return ingredient.calories
