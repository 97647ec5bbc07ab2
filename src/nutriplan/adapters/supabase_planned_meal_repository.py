"""Supabase repository for planned meals."""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from nutriplan.domain.plans import IngredientOverride, PlannedMeal
from nutriplan.domain.recipes import MealType
from nutriplan.services.weekly_plan import PlannedMealRepository


@dataclass
class SupabasePlannedMealRepository(PlannedMealRepository):
    """Supabase implementation for planned meals."""

    client: Client

    def insert_planned_meals(self, user_id: UUID, meals: list[PlannedMeal]) -> None:
        """Insert the meals in a single request."""
        payload = [planned_meal_row(user_id, meal) for meal in meals]
        if not payload:
            return
        response = self.client.table("planned_meals").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to insert planned meals")

    def count_planned_meals(self, user_id: UUID, start: date, end: date) -> int:
        """Return the number of planned meals in the date range."""
        response = (
            self.client.table("planned_meals")
            .select("id", count="exact", head=True)
            .eq("user_id", str(user_id))
            .gte("meal_date", start.isoformat())
            .lte("meal_date", end.isoformat())
            .execute()
        )
        return response.count or 0

    def count_meals_by_date(
        self, user_id: UUID, dates: Sequence[date]
    ) -> dict[date, int]:
        """Return planned meal counts per date."""
        if not dates:
            return {}
        response = (
            self.client.table("planned_meals")
            .select("meal_date")
            .eq("user_id", str(user_id))
            .in_("meal_date", [day.isoformat() for day in dates])
            .execute()
        )
        return dict(
            Counter(
                date.fromisoformat(str(row["meal_date"])) for row in response.data or []
            )
        )

    def list_planned_slots(
        self, user_id: UUID, dates: Sequence[date]
    ) -> set[tuple[date, MealType]]:
        """Return the (date, meal type) pairs already planned."""
        if not dates:
            return set()
        response = (
            self.client.table("planned_meals")
            .select("meal_date, meal_type")
            .eq("user_id", str(user_id))
            .in_("meal_date", [day.isoformat() for day in dates])
            .execute()
        )
        return {
            (date.fromisoformat(str(row["meal_date"])), MealType(row["meal_type"]))
            for row in response.data or []
        }

    def delete_meals_before(self, user_id: UUID, before: date) -> int:
        """Delete planned meals dated before a date."""
        response = (
            self.client.table("planned_meals")
            .delete()
            .eq("user_id", str(user_id))
            .lt("meal_date", before.isoformat())
            .execute()
        )
        return len(response.data or [])


def planned_meal_row(user_id: UUID, meal: PlannedMeal) -> dict[str, object]:
    """Serialize a planned meal for insertion."""
    return {
        "user_id": str(user_id),
        "recipe_id": meal.recipe_id,
        "meal_date": meal.meal_date.isoformat(),
        "meal_type": str(meal.meal_type),
        "is_eaten": False,
        "ingredient_overrides": (
            [_override_payload(override) for override in meal.ingredient_overrides]
            if meal.ingredient_overrides
            else None
        ),
    }


def _override_payload(override: IngredientOverride) -> dict[str, object]:
    return {
        "ingredient_id": override.ingredient_id,
        "new_amount": override.new_amount,
        "auto_adjusted": override.auto_adjusted,
    }
