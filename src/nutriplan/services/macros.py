"""Macro arithmetic shared by the planner and the optimizer."""

import math
from collections.abc import Sequence

from nutriplan.domain.plans import (
    DayAggregate,
    IngredientOverride,
    MacroType,
    MacroValues,
)
from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import Ingredient, Recipe

INGREDIENT_ROUNDING_STEP = 5
MAX_INGREDIENT_CHANGE_PERCENT = 0.2
MACRO_SURPLUS_THRESHOLD_PERCENT = 1.05


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties away from zero for positive values (2.5 -> 3)."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_ingredient_amount(amount: float) -> float:
    """Round an amount to the nearest multiple of the 5 g step."""
    step = INGREDIENT_ROUNDING_STEP
    return float(math.floor(amount / step + 0.5) * step)


def calculate_recipe_macros(
    recipe: Recipe, overrides: Sequence[IngredientOverride] | None = None
) -> MacroValues:
    """Return recipe macros with ingredient overrides applied."""
    if not recipe.ingredients:
        return MacroValues(
            calories=recipe.total_calories,
            protein_g=recipe.total_protein_g,
            carbs_g=recipe.total_carbs_g,
            fats_g=recipe.total_fats_g,
        )
    amounts = {item.ingredient_id: item.new_amount for item in overrides or []}
    calories = protein = carbs = fats = 0.0
    for ingredient in recipe.ingredients:
        if ingredient.base_amount == 0:
            continue
        amount = amounts.get(ingredient.id, ingredient.base_amount)
        scale = amount / ingredient.base_amount
        calories += ingredient.calories * scale
        protein += ingredient.protein_g * scale
        carbs += ingredient.carbs_g * scale
        fats += ingredient.fats_g * scale
    return MacroValues(
        calories=round_half_up(calories),
        protein_g=round_half_up(protein, 1),
        carbs_g=round_half_up(carbs, 1),
        fats_g=round_half_up(fats, 1),
    )


def aggregate_day(values: Sequence[MacroValues]) -> DayAggregate:
    """Sum per-meal macros into a day aggregate."""
    return DayAggregate(
        calories=round_half_up(sum(value.calories for value in values)),
        protein_g=round_half_up(sum(value.protein_g for value in values), 1),
        carbs_g=round_half_up(sum(value.carbs_g for value in values), 1),
        fats_g=round_half_up(sum(value.fats_g for value in values), 1),
    )


def macro_value(values: MacroValues, macro: MacroType) -> float:
    """Return the grams of one macro."""
    if macro == MacroType.PROTEIN:
        return values.protein_g
    if macro == MacroType.CARBS:
        return values.carbs_g
    return values.fats_g


def macro_target(targets: NutritionTargets, macro: MacroType) -> int:
    """Return the daily target grams of one macro."""
    if macro == MacroType.PROTEIN:
        return targets.target_protein_g
    if macro == MacroType.CARBS:
        return targets.target_carbs_g
    return targets.target_fats_g


def ingredient_macro(ingredient: Ingredient, macro: MacroType) -> float:
    """Return an ingredient's grams of one macro at its base amount."""
    if macro == MacroType.PROTEIN:
        return ingredient.protein_g
    if macro == MacroType.CARBS:
        return ingredient.carbs_g
    return ingredient.fats_g


def calculate_macro_surplus(
    day: MacroValues, targets: NutritionTargets
) -> dict[MacroType, float]:
    """Return consumed minus target per macro; positive means excess."""
    return {
        macro: round_half_up(macro_value(day, macro) - macro_target(targets, macro), 1)
        for macro in MacroType
    }


def should_optimize_macro(
    day: MacroValues, targets: NutritionTargets, macro: MacroType
) -> bool:
    """Return True when a macro exceeds 105% of its target."""
    target = macro_target(targets, macro)
    if target == 0:
        return False
    return macro_value(day, macro) / target > MACRO_SURPLUS_THRESHOLD_PERCENT


def find_macro_for_optimization(
    day: MacroValues, targets: NutritionTargets
) -> MacroType | None:
    """Return the qualifying macro with the largest surplus, if any."""
    surplus = calculate_macro_surplus(day, targets)
    candidates = [
        macro
        for macro in MacroType
        if surplus[macro] > 0 and should_optimize_macro(day, targets, macro)
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda macro: surplus[macro])
