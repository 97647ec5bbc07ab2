"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from nutriplan.adapters.supabase_planned_meal_repository import (
    SupabasePlannedMealRepository,
)
from nutriplan.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutriplan.adapters.supabase_recipe_catalog import SupabaseRecipeCatalog
from nutriplan.config import Settings
from nutriplan.services.cache import InMemoryCache
from nutriplan.services.day_plan import DayPlanAssembler
from nutriplan.services.optimizer import MacroOptimizer
from nutriplan.services.plans import PlanService
from nutriplan.services.selection import CandidateRecipeSelector
from nutriplan.services.weekly_plan import WeeklyPlanGenerator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    selector: CandidateRecipeSelector
    weekly_plan_generator: WeeklyPlanGenerator
    plan_service: PlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog = SupabaseRecipeCatalog(supabase_client)
    meal_repository = SupabasePlannedMealRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    selector = CandidateRecipeSelector(
        catalog=catalog,
        rng=random.Random(resolved_settings.random_seed),
        tolerance=resolved_settings.calorie_tolerance,
        cache=InMemoryCache(),
        cache_ttl_seconds=resolved_settings.recipe_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    generator = WeeklyPlanGenerator(
        assembler=DayPlanAssembler(selector),
        optimizer=MacroOptimizer(debug=resolved_settings.debug),
        repository=meal_repository,
        days_to_generate=resolved_settings.days_to_generate,
        debug=resolved_settings.debug,
    )
    plan_service = PlanService(
        profile_repository=profile_repository,
        meal_repository=meal_repository,
        generator=generator,
    )
    return AppContainer(
        settings=resolved_settings,
        selector=selector,
        weekly_plan_generator=generator,
        plan_service=plan_service,
    )
