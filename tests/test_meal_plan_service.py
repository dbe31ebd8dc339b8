"""Tests for meal plan generation and storage."""

import asyncio

import pytest

from caloai.domain.calories import CalorieHistory
from caloai.domain.errors import UpstreamMalformed
from caloai.domain.profiles import Profile

ADDRESS = "0xabc"


def test_first_request_generates_with_defaults(
    meal_plan_service, meal_plan_repository, generative_client
) -> None:
    plan = asyncio.run(meal_plan_service.get_or_generate(ADDRESS))

    assert len(plan.breakfast) == len(plan.lunch) == len(plan.supper) == 5
    assert plan.user_profile.goal == "maintenance"
    assert plan.user_profile.calorie_target == "2000"
    assert plan.favorite_foods == []
    assert meal_plan_repository.plans[ADDRESS] == plan
    assert "No favorites yet" in generative_client.calls[0]["prompt"]


def test_stored_plan_is_reused(meal_plan_service, generative_client) -> None:
    first = asyncio.run(meal_plan_service.get_or_generate(ADDRESS))
    second = asyncio.run(meal_plan_service.get_or_generate(ADDRESS))

    assert second == first
    assert len(generative_client.calls) == 1


def test_plan_uses_profile_and_favorites(
    meal_plan_service, profile_service, calorie_service, generative_client
) -> None:
    profile_service.save_profile(
        ADDRESS,
        Profile(goal="weight_gain", calorie_target="2800", restrictions="vegetarian"),
    )
    days = {
        f"2024-03-0{day}": {
            "lunch": [{"calories": 400, "items": [f"food-{day}", "lentils"]}]
        }
        for day in range(1, 8)
    }
    calorie_service.save_history(ADDRESS, CalorieHistory.model_validate(days))

    plan = asyncio.run(meal_plan_service.get_or_generate(ADDRESS))

    assert plan.user_profile.goal == "weight_gain"
    assert plan.user_profile.restrictions == "vegetarian"
    assert plan.favorite_foods[0] == "lentils"
    assert len(plan.favorite_foods) == 5
    prompt = generative_client.calls[0]["prompt"]
    assert "2800" in prompt
    assert "vegetarian" in prompt


def test_regenerate_unlocks_meal_planner_once(
    meal_plan_service, rewards_service, generative_client
) -> None:
    asyncio.run(meal_plan_service.regenerate(ADDRESS))
    asyncio.run(meal_plan_service.regenerate(ADDRESS))

    rewards = rewards_service.ensure_rewards(ADDRESS)
    planner = rewards.find_achievement("generate_meal_plan")
    assert planner is not None
    assert planner.is_unlocked
    assert rewards.total_points == 15
    assert len(generative_client.calls) == 2


def test_invalid_plan_is_not_stored(
    meal_plan_service, meal_plan_repository, generative_client
) -> None:
    generative_client.payload = {"breakfast": ["only one"], "lunch": [], "supper": []}

    with pytest.raises(UpstreamMalformed):
        asyncio.run(meal_plan_service.get_or_generate(ADDRESS))
    assert meal_plan_repository.plans == {}


def test_suggest_does_not_store(meal_plan_service, meal_plan_repository) -> None:
    suggestions = asyncio.run(
        meal_plan_service.suggest(
            goal="maintenance",
            calorie_target="2000",
            restrictions="",
            history=CalorieHistory({}),
        )
    )

    assert len(suggestions.supper) == 5
    assert meal_plan_repository.plans == {}
