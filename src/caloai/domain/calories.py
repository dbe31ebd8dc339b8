"""Calorie log models."""

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic.alias_generators import to_camel

MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "supper", "snacks", "drinks")
MAIN_MEAL_TYPES: tuple[str, ...] = ("breakfast", "lunch", "supper")


class CalorieLogEntry(BaseModel):
    """A single logged food entry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    calories: float = 0
    items: list[str] = Field(default_factory=list)
    timestamp: str = ""
    image_url: str | None = None

    @field_validator("calories", mode="before")
    @classmethod
    def _missing_calories_count_as_zero(cls, value: object) -> object:
        return 0 if value is None else value


class MealCalories(BaseModel):
    """Entries for one day grouped by meal type."""

    breakfast: list[CalorieLogEntry] = Field(default_factory=list)
    lunch: list[CalorieLogEntry] = Field(default_factory=list)
    supper: list[CalorieLogEntry] = Field(default_factory=list)
    snacks: list[CalorieLogEntry] = Field(default_factory=list)
    drinks: list[CalorieLogEntry] = Field(default_factory=list)

    def entries(
        self, meal_types: tuple[str, ...] = MEAL_TYPES
    ) -> list[CalorieLogEntry]:
        """Return entries of the given meal types in meal order."""
        return [entry for meal in meal_types for entry in getattr(self, meal)]

    def meal_total(self, meal_type: str) -> float:
        """Return the calorie total for one meal type."""
        return sum(entry.calories for entry in getattr(self, meal_type))

    def total(self) -> float:
        """Return the calorie total across all meal types."""
        return sum(entry.calories for entry in self.entries())


class CalorieHistory(RootModel[dict[str, MealCalories]]):
    """Date-keyed (YYYY-MM-DD) map of daily meals."""

    def day(self, key: str) -> MealCalories | None:
        """Return the meals logged on a date key, if any."""
        return self.root.get(key)

    def days(self) -> list[MealCalories]:
        """Return all logged days."""
        return list(self.root.values())


@dataclass(frozen=True)
class DailyCalories:
    """Calorie total for a calendar day."""

    day: date
    name: str
    calories: float


@dataclass(frozen=True)
class CalorieSummary:
    """Dashboard aggregates over a calorie history."""

    today: date
    today_total: float
    today_by_meal: dict[str, float]
    last_7_days: list[DailyCalories]
    weekly_total: float
    weekly_average: float
    common_foods: list[str]
    all_logged_foods: list[str]
    calorie_target: int | None
