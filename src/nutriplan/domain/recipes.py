"""Recipe catalog models."""

from dataclasses import dataclass, field
from enum import StrEnum


class MealType(StrEnum):
    """Meal occasions within a day."""

    BREAKFAST = "breakfast"
    SNACK_MORNING = "snack_morning"
    LUNCH = "lunch"
    SNACK_AFTERNOON = "snack_afternoon"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class Ingredient:
    """Recipe ingredient with macros computed at its base amount."""

    id: int
    base_amount: float
    unit: str
    is_scalable: bool
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class Recipe:
    """Recipe with its ingredient breakdown."""

    id: int
    name: str
    meal_types: frozenset[MealType]
    total_calories: float
    total_protein_g: float
    total_carbs_g: float
    total_fats_g: float
    ingredients: list[Ingredient] = field(default_factory=list)
