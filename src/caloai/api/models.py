"""Request bodies for the HTTP API."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from caloai.domain.calories import CalorieHistory
from caloai.domain.profiles import Profile


class CamelModel(BaseModel):
    """Base model accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SaveProfileRequest(CamelModel):
    address: str | None = None
    profile: Profile | None = None


class SaveCaloriesRequest(CamelModel):
    address: str | None = None
    calorie_data: CalorieHistory | None = None


class AddressRequest(CamelModel):
    address: str | None = None


class AddPointsRequest(CamelModel):
    address: str | None = None
    action: str | None = None
    points: int | None = None
    description: str | None = None


class UnlockAchievementRequest(CamelModel):
    address: str | None = None
    achievement_id: str | None = None


class ClaimPointsRequest(CamelModel):
    address: str | None = None
    points: int = 0
    transaction_hash: str | None = None


class AnalyzeImageRequest(CamelModel):
    image: Any = None
    address: str | None = None


class MealPlanProfile(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )

    goal: str | None = None
    calorie_target: str | None = None
    restrictions: str | None = None


class GenerateMealPlanRequest(CamelModel):
    profile: MealPlanProfile | None = None
    calorie_history: CalorieHistory | None = None


class RecommendFoodRequest(CamelModel):
    health_goal: str | None = None
    common_foods: list[str] | None = None
