"""Slot-by-slot recipe selection for one calendar day."""

from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from datetime import date

from nutriplan.domain.plans import MealPlanConfig, PlannedMeal
from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import Recipe
from nutriplan.services.selection import CandidateRecipeSelector


@dataclass(frozen=True)
class DayPlan:
    """Draft meals for a day with the recipes chosen for them."""

    meals: list[PlannedMeal]
    recipes: list[Recipe]
    used_recipe_ids: frozenset[int]


@dataclass
class DayPlanAssembler:
    """Builds a day's draft meals from a slot configuration."""

    selector: CandidateRecipeSelector

    def assemble_day(
        self,
        meal_date: date,
        config: MealPlanConfig,
        targets: NutritionTargets,
        used_recipe_ids: AbstractSet[int] = frozenset(),
    ) -> DayPlan:
        """Select one recipe per slot in order, avoiding repeats within the day."""
        used = frozenset(used_recipe_ids)
        meals: list[PlannedMeal] = []
        recipes: list[Recipe] = []
        for slot in config.slots:
            recipe = self.selector.select(
                slot.meal_type,
                targets.target_calories * slot.calorie_share,
                used,
            )
            used = used | {recipe.id}
            recipes.append(recipe)
            meals.append(
                PlannedMeal(
                    recipe_id=recipe.id,
                    meal_date=meal_date,
                    meal_type=slot.meal_type,
                )
            )
        return DayPlan(meals=meals, recipes=recipes, used_recipe_ids=used)
