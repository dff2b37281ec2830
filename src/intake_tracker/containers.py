"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from intake_tracker.adapters.fdc_client import FdcClient, HttpxFdcClient
from intake_tracker.adapters.supabase_diet_plan_repository import (
    SupabaseDietPlanRepository,
)
from intake_tracker.adapters.supabase_food_repository import SupabaseFoodItemRepository
from intake_tracker.adapters.supabase_intake_repository import (
    SupabaseConsumedMealRepository,
    SupabaseIntakeRepository,
)
from intake_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from intake_tracker.adapters.supabase_user_repository import (
    SupabaseUserProfileRepository,
)
from intake_tracker.config import Settings
from intake_tracker.services.cache import InMemoryCache
from intake_tracker.services.foods import FoodImportService
from intake_tracker.services.ledger import ConsumptionLedger
from intake_tracker.services.meals import MealService
from intake_tracker.services.plan_rollup import PlanRollupService
from intake_tracker.services.profile_intake import ProfileIntakeCalculator
from intake_tracker.services.users import UserProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    fdc_client: FdcClient
    profile_service: UserProfileService
    meal_service: MealService
    food_import_service: FoodImportService
    ledger: ConsumptionLedger
    plan_rollup_service: PlanRollupService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseUserProfileRepository(supabase_client)
    food_repository = SupabaseFoodItemRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    calculator = ProfileIntakeCalculator()

    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    food_import_service = FoodImportService(
        fdc_client=fdc_client,
        repository=food_repository,
        cache=InMemoryCache(),
        search_ttl_seconds=resolved_settings.fdc_search_ttl_seconds,
        retry_attempts=resolved_settings.fdc_retry_attempts,
    )
    ledger = ConsumptionLedger(
        profiles=profile_repository,
        meals=meal_repository,
        intakes=SupabaseIntakeRepository(supabase_client),
        consumed_meals=SupabaseConsumedMealRepository(supabase_client),
        calculator=calculator,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        fdc_client=fdc_client,
        profile_service=UserProfileService(profile_repository, calculator),
        meal_service=MealService(meal_repository, food_repository),
        food_import_service=food_import_service,
        ledger=ledger,
        plan_rollup_service=PlanRollupService(
            SupabaseDietPlanRepository(supabase_client), meal_repository
        ),
        close_resources=close_resources,
    )
