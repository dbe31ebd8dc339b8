"""Meal plan models."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel

SUGGESTIONS_PER_MEAL = 5

Suggestions = Annotated[
    list[StrictStr],
    Field(min_length=SUGGESTIONS_PER_MEAL, max_length=SUGGESTIONS_PER_MEAL),
]


class MealPlanSuggestions(BaseModel):
    """Exactly five suggestions for each main meal."""

    breakfast: Suggestions
    lunch: Suggestions
    supper: Suggestions


class ProfileSnapshot(BaseModel):
    """Profile fields a plan was generated for."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    goal: str | None = None
    calorie_target: str | None = None
    restrictions: str | None = None


class MealPlan(MealPlanSuggestions):
    """Stored meal plan with generation metadata."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    generated_at: datetime
    user_profile: ProfileSnapshot
    favorite_foods: list[str] = Field(default_factory=list)
