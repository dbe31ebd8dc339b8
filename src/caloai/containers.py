"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from caloai.adapters.gemini_client import GeminiGenerativeClient
from caloai.adapters.supabase_calorie_log_repository import (
    SupabaseCalorieLogRepository,
)
from caloai.adapters.supabase_meal_plan_repository import SupabaseMealPlanRepository
from caloai.adapters.supabase_profile_repository import SupabaseProfileRepository
from caloai.adapters.supabase_rewards_repository import SupabaseRewardsRepository
from caloai.config import Settings
from caloai.services.analysis import AnalysisService
from caloai.services.calories import CalorieLogService
from caloai.services.meal_plans import MealPlanService
from caloai.services.profiles import ProfileService
from caloai.services.rewards import RewardsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    calorie_service: CalorieLogService
    rewards_service: RewardsService
    analysis_service: AnalysisService
    meal_plan_service: MealPlanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    One Supabase client is shared by every repository for the process lifetime.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    calorie_service = CalorieLogService(SupabaseCalorieLogRepository(supabase_client))
    rewards_service = RewardsService(SupabaseRewardsRepository(supabase_client))

    gemini_client = (
        GeminiGenerativeClient.create(
            api_key=resolved_settings.gemini_api_key,
            base_url=resolved_settings.gemini_base_url,
            timeout=resolved_settings.gemini_timeout_seconds,
        )
        if resolved_settings.gemini_api_key
        else None
    )
    analysis_service = AnalysisService(
        client=gemini_client, model=resolved_settings.gemini_model
    )
    meal_plan_service = MealPlanService(
        repository=SupabaseMealPlanRepository(supabase_client),
        profile_service=profile_service,
        calorie_service=calorie_service,
        analysis_service=analysis_service,
        rewards_service=rewards_service,
    )

    async def close_resources() -> None:
        if gemini_client is not None:
            await gemini_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        calorie_service=calorie_service,
        rewards_service=rewards_service,
        analysis_service=analysis_service,
        meal_plan_service=meal_plan_service,
        close_resources=close_resources,
    )
