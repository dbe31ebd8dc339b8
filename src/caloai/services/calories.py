"""Calorie log service and dashboard aggregation."""

from collections import Counter
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from caloai.domain.calories import (
    MAIN_MEAL_TYPES,
    MEAL_TYPES,
    CalorieHistory,
    CalorieSummary,
    DailyCalories,
)

TREND_DAYS = 7
COMMON_FOODS_LIMIT = 10
LOGGED_FOODS_LIMIT = 50


class CalorieLogRepository(Protocol):
    """Persistence interface for calorie histories."""

    def get_history(self, address: str) -> CalorieHistory | None:
        """Return the stored history, if any."""

    def upsert_history(self, address: str, history: CalorieHistory) -> bool:
        """Replace the history and return True when it was newly created."""


@dataclass
class CalorieLogService:
    """Service for calorie histories."""

    repository: CalorieLogRepository

    def get_history(self, address: str) -> CalorieHistory:
        """Return the stored history or an empty one."""
        return self.repository.get_history(address) or CalorieHistory({})

    def save_history(self, address: str, history: CalorieHistory) -> bool:
        """Replace the whole date-keyed history (last write wins)."""
        return self.repository.upsert_history(address, history)

    def get_summary(
        self,
        address: str,
        today: date | None = None,
        calorie_target: int | None = None,
    ) -> CalorieSummary:
        """Return dashboard aggregates for the stored history."""
        return summarize_history(
            self.get_history(address),
            today or datetime.now(tz=UTC).date(),
            calorie_target,
        )


def summarize_history(
    history: CalorieHistory, today: date, calorie_target: int | None = None
) -> CalorieSummary:
    """Aggregate today's intake, a seven-day trend and food frequencies."""
    today_meals = history.day(today.isoformat())
    today_by_meal = {
        meal: today_meals.meal_total(meal) if today_meals else 0.0
        for meal in MEAL_TYPES
    }

    trend = []
    for offset in range(TREND_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        meals = history.day(day.isoformat())
        trend.append(
            DailyCalories(
                day=day,
                name=day.strftime("%a"),
                calories=meals.total() if meals else 0.0,
            )
        )
    weekly_total = sum(entry.calories for entry in trend)

    return CalorieSummary(
        today=today,
        today_total=sum(today_by_meal.values()),
        today_by_meal=today_by_meal,
        last_7_days=trend,
        weekly_total=weekly_total,
        weekly_average=round(weekly_total / TREND_DAYS),
        common_foods=favorite_foods(history, COMMON_FOODS_LIMIT, MEAL_TYPES),
        all_logged_foods=logged_foods(history, MEAL_TYPES)[:LOGGED_FOODS_LIMIT],
        calorie_target=calorie_target,
    )


def logged_foods(
    history: CalorieHistory, meal_types: tuple[str, ...] = MAIN_MEAL_TYPES
) -> list[str]:
    """Return unique food items in the order they were first logged."""
    return list(_food_counts(history, meal_types))


def favorite_foods(
    history: CalorieHistory,
    limit: int = COMMON_FOODS_LIMIT,
    meal_types: tuple[str, ...] = MAIN_MEAL_TYPES,
) -> list[str]:
    """Return the most frequently logged food items."""
    return [food for food, _ in _food_counts(history, meal_types).most_common(limit)]


def _food_counts(history: CalorieHistory, meal_types: tuple[str, ...]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for day in history.days():
        for entry in day.entries(meal_types):
            counts.update(entry.items)
    return counts
