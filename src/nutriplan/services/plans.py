"""Plan generation for stored user profiles."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from nutriplan.domain.errors import MealPlanExistsError, ProfileNotFoundError
from nutriplan.domain.plans import PlannedMeal, StoredProfile
from nutriplan.services.plan_config import resolve
from nutriplan.services.weekly_plan import (
    PlannedMealRepository,
    WeeklyPlanGenerator,
    plan_dates,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Read access to stored profiles."""

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile for a user, if present."""


@dataclass(frozen=True)
class GeneratedPlan:
    """Result of filling a user's plan."""

    generated_days: list[date]
    meals: list[PlannedMeal]


@dataclass
class PlanService:
    """Fills the upcoming week of a user's plan and persists it."""

    profile_repository: ProfileRepository
    meal_repository: PlannedMealRepository
    generator: WeeklyPlanGenerator

    def generate_plan(self, user_id: UUID, start: date | None = None) -> GeneratedPlan:
        """Generate meals for every day of the week that lacks a complete plan."""
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(f"Profile not found for user {user_id}")

        start_date = start or datetime.now(tz=UTC).date()
        self._cleanup_before(user_id, start_date)

        config = resolve(profile.meal_plan_type, profile.selected_meals)
        dates = plan_dates(start_date, self.generator.days_to_generate)
        missing = self.generator.find_missing_days(user_id, dates, len(config.slots))
        if not missing:
            raise MealPlanExistsError(dates[0], dates[-1])

        _logger.info(
            "Generating plan for user %s: %s missing days", user_id, len(missing)
        )
        generated = self.generator.generate_days(profile.targets, config, missing)
        # Meals the user already has on a partial day are never replaced.
        existing = self.meal_repository.list_planned_slots(user_id, missing)
        meals = [
            meal
            for meal in generated
            if (meal.meal_date, meal.meal_type) not in existing
        ]
        self.meal_repository.insert_planned_meals(user_id, meals)
        return GeneratedPlan(generated_days=missing, meals=meals)

    def _cleanup_before(self, user_id: UUID, start_date: date) -> None:
        try:
            removed = self.meal_repository.delete_meals_before(user_id, start_date)
        except Exception:
            _logger.exception("Failed to clean up old planned meals for %s", user_id)
            return
        if removed:
            _logger.info("Removed %s past planned meals for %s", removed, user_id)
