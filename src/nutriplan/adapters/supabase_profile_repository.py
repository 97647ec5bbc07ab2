"""Supabase repository for stored profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutriplan.domain.plans import MealPlanType, StoredProfile
from nutriplan.domain.profile import NutritionTargets
from nutriplan.domain.recipes import MealType
from nutriplan.services.plans import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Reads nutrition targets and plan layout from profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the profile, or None when missing or without targets."""
        response = (
            self.client.table("profiles")
            .select(
                "id, target_calories, target_protein_g, target_carbs_g, "
                "target_fats_g, meal_plan_type, selected_meals"
            )
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if row.get("target_calories") is None:
            return None
        selected = row.get("selected_meals")
        return StoredProfile(
            user_id=UUID(str(row["id"])),
            targets=NutritionTargets(
                target_calories=int(row["target_calories"]),
                target_protein_g=int(row.get("target_protein_g") or 0),
                target_carbs_g=int(row.get("target_carbs_g") or 0),
                target_fats_g=int(row.get("target_fats_g") or 0),
            ),
            meal_plan_type=MealPlanType(row.get("meal_plan_type") or "3_main"),
            selected_meals=[MealType(meal) for meal in selected] if selected else None,
        )
