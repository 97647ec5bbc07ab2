"""Supabase-backed recipe catalog."""

from dataclasses import dataclass

from supabase import Client

from nutriplan.domain.recipes import Ingredient, MealType, Recipe
from nutriplan.services.selection import RecipeCatalog

_RECIPE_COLUMNS = (
    "id, name, meal_types, total_calories, total_protein_g, total_carbs_g, "
    "total_fats_g, recipe_ingredients(ingredient_id, base_amount, unit, "
    "is_scalable, calories, protein_g, carbs_g, fats_g)"
)


@dataclass
class SupabaseRecipeCatalog(RecipeCatalog):
    """Reads candidate recipes with their ingredient breakdown."""

    client: Client

    def fetch_candidates(
        self, meal_type: MealType, min_calories: int, max_calories: int
    ) -> list[Recipe]:
        """Return recipes for a meal type within the calorie band."""
        response = (
            self.client.table("recipes")
            .select(_RECIPE_COLUMNS)
            .contains("meal_types", [str(meal_type)])
            .gte("total_calories", min_calories)
            .lte("total_calories", max_calories)
            .order("id", desc=False)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]


def _parse_recipe(row: dict[str, object]) -> Recipe:
    return Recipe(
        id=int(row["id"]),
        name=str(row.get("name") or ""),
        meal_types=frozenset(MealType(value) for value in row.get("meal_types") or []),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein_g=float(row.get("total_protein_g") or 0.0),
        total_carbs_g=float(row.get("total_carbs_g") or 0.0),
        total_fats_g=float(row.get("total_fats_g") or 0.0),
        ingredients=[
            _parse_ingredient(item) for item in row.get("recipe_ingredients") or []
        ],
    )


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    return Ingredient(
        id=int(row["ingredient_id"]),
        base_amount=float(row.get("base_amount") or 0.0),
        unit=str(row.get("unit") or "g"),
        is_scalable=bool(row.get("is_scalable", False)),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
    )
