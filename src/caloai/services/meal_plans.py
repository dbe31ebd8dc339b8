"""Meal plan service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from caloai.domain.calories import CalorieHistory
from caloai.domain.meal_plans import MealPlan, MealPlanSuggestions, ProfileSnapshot
from caloai.domain.profiles import Goal
from caloai.services.analysis import AnalysisService
from caloai.services.calories import CalorieLogService, favorite_foods, logged_foods
from caloai.services.profiles import ProfileService
from caloai.services.rewards import RewardsService

logger = logging.getLogger(__name__)

MEAL_PLANNER_ACHIEVEMENT_ID = "generate_meal_plan"
STORED_FAVORITES_LIMIT = 5
DEFAULT_SNAPSHOT = ProfileSnapshot(
    goal=Goal.MAINTENANCE.value, calorie_target="2000", restrictions=""
)


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def get_meal_plan(self, address: str) -> MealPlan | None:
        """Return the stored plan, if any."""

    def upsert_meal_plan(self, address: str, plan: MealPlan) -> None:
        """Replace the stored plan."""


@dataclass
class MealPlanService:
    """Generates and stores meal plans from profiles and food history."""

    repository: MealPlanRepository
    profile_service: ProfileService
    calorie_service: CalorieLogService
    analysis_service: AnalysisService
    rewards_service: RewardsService

    async def get_or_generate(self, address: str) -> MealPlan:
        """Return the stored plan, generating one if none exists."""
        existing = self.repository.get_meal_plan(address)
        if existing is not None:
            return existing
        return await self._generate_and_save(address)

    async def regenerate(self, address: str) -> MealPlan:
        """Replace the plan and unlock the meal planner achievement.

        The plan write and the achievement write are independent; a failure
        in the second leaves the new plan stored.
        """
        plan = await self._generate_and_save(address)
        self.rewards_service.unlock_achievement(address, MEAL_PLANNER_ACHIEVEMENT_ID)
        return plan

    async def suggest(
        self,
        goal: str,
        calorie_target: str,
        restrictions: str,
        history: CalorieHistory,
    ) -> MealPlanSuggestions:
        """Generate suggestions without reading or writing stored data."""
        return await self.analysis_service.generate_meal_plan(
            goal=goal,
            calorie_target=calorie_target,
            restrictions=restrictions,
            favorite_foods=favorite_foods(history),
            logged_foods=logged_foods(history),
        )

    async def _generate_and_save(self, address: str) -> MealPlan:
        profile = self.profile_service.find_profile(address)
        snapshot = (
            ProfileSnapshot(
                goal=profile.goal,
                calorie_target=profile.calorie_target,
                restrictions=profile.restrictions,
            )
            if profile
            else DEFAULT_SNAPSHOT
        )
        history = self.calorie_service.get_history(address)
        favorites = favorite_foods(history)
        suggestions = await self.analysis_service.generate_meal_plan(
            goal=snapshot.goal or "",
            calorie_target=snapshot.calorie_target or "",
            restrictions=snapshot.restrictions or "",
            favorite_foods=favorites,
            logged_foods=logged_foods(history),
        )
        plan = MealPlan(
            breakfast=suggestions.breakfast,
            lunch=suggestions.lunch,
            supper=suggestions.supper,
            generated_at=datetime.now(tz=UTC),
            user_profile=snapshot,
            favorite_foods=favorites[:STORED_FAVORITES_LIMIT],
        )
        self.repository.upsert_meal_plan(address, plan)
        logger.info("Meal plan generated", extra={"address": address})
        return plan
