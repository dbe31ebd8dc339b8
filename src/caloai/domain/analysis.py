"""Models for AI analysis results."""

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FoodAnalysis(BaseModel):
    """Calorie estimate and detected items for a food photo."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    estimated_calories: float | None
    food_items: list[str]

    @field_validator("estimated_calories", mode="before")
    @classmethod
    def _reject_bool(cls, value: object) -> object:
        if isinstance(value, bool):
            raise ValueError("calorie estimate must be a number")
        return value

    @field_validator("food_items", mode="before")
    @classmethod
    def _keep_strings(cls, value: object) -> object:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str)]
        return value


class FoodRecommendations(BaseModel):
    """General dietary suggestions."""

    recommendations: list[str]

    @field_validator("recommendations", mode="before")
    @classmethod
    def _keep_strings(cls, value: object) -> object:
        if isinstance(value, list):
            return [item for item in value if isinstance(item, str)]
        return value
