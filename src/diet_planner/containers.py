"""Dependency container wiring for the application."""

import random
from dataclasses import dataclass

from supabase import create_client

from diet_planner.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from diet_planner.adapters.supabase_history_repository import (
    SupabaseHistoryRepository,
)
from diet_planner.adapters.supabase_plan_repository import SupabasePlanRepository
from diet_planner.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_planner.config import Settings
from diet_planner.services.cache import InMemoryCache
from diet_planner.services.catalog import CatalogService
from diet_planner.services.history import HistoryService
from diet_planner.services.planner import MealPlanService
from diet_planner.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    catalog_service: CatalogService
    meal_plan_service: MealPlanService
    history_service: HistoryService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    catalog_repository = SupabaseCatalogRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    history_repository = SupabaseHistoryRepository(supabase_client)
    catalog_service = CatalogService(
        repository=catalog_repository,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    meal_plan_service = MealPlanService(
        catalog_service=catalog_service,
        repository=plan_repository,
        history_repository=history_repository,
        rng=random.Random(resolved_settings.plan_random_seed),
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(profile_repository),
        catalog_service=catalog_service,
        meal_plan_service=meal_plan_service,
        history_service=HistoryService(
            repository=history_repository, plans=plan_repository
        ),
    )
