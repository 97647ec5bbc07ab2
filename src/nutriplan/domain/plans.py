"""Meal plan models."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID

from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import MealType


class MealPlanType(StrEnum):
    """Supported daily meal layouts."""

    THREE_MAIN_TWO_SNACKS = "3_main_2_snacks"
    THREE_MAIN_ONE_SNACK = "3_main_1_snack"
    THREE_MAIN = "3_main"
    TWO_MAIN = "2_main"


class MacroType(StrEnum):
    """Macronutrients tracked by the optimizer."""

    PROTEIN = "protein"
    CARBS = "carbs"
    FATS = "fats"


@dataclass(frozen=True)
class MealSlot:
    """One meal occasion and its share of daily calories."""

    meal_type: MealType
    calorie_share: float


@dataclass(frozen=True)
class MealPlanConfig:
    """Ordered meal slots for a day."""

    slots: list[MealSlot]

    @property
    def meal_types(self) -> list[MealType]:
        return [slot.meal_type for slot in self.slots]


@dataclass(frozen=True)
class CalorieRange:
    """Calorie band around a meal target."""

    min: float
    max: float
    target: float


@dataclass(frozen=True)
class MacroValues:
    """Calories and macros for a recipe or a day."""

    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class DayAggregate(MacroValues):
    """Summed calories and macros for every meal of one day."""


@dataclass(frozen=True)
class IngredientOverride:
    """Deviation from an ingredient's base amount within one planned meal."""

    ingredient_id: int
    new_amount: float
    auto_adjusted: bool = True


@dataclass(frozen=True)
class PlannedMeal:
    """A recipe scheduled for a date and meal slot."""

    recipe_id: int
    meal_date: date
    meal_type: MealType
    ingredient_overrides: list[IngredientOverride] | None = None


@dataclass(frozen=True)
class StoredProfile:
    """Persisted profile fields needed to generate a plan."""

    user_id: UUID
    targets: NutritionTargets
    meal_plan_type: MealPlanType
    selected_meals: list[MealType] | None = None
