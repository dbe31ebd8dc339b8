"""Meal plan endpoints."""

from fastapi import APIRouter, Request

from caloai.api.dependencies import get_container, require_address
from caloai.api.models import AddressRequest, GenerateMealPlanRequest
from caloai.domain.calories import CalorieHistory
from caloai.domain.errors import ValidationError

router = APIRouter(tags=["meal-plans"])


@router.get("/meal-plan")
async def get_meal_plan(
    request: Request, address: str | None = None
) -> dict[str, object]:
    """Return the stored plan, generating one on first request."""
    wallet = require_address(address)
    plan = await get_container(request).meal_plan_service.get_or_generate(wallet)
    return plan.model_dump(by_alias=True, mode="json")


@router.post("/meal-plan")
async def regenerate_meal_plan(
    body: AddressRequest, request: Request
) -> dict[str, object]:
    """Force a new plan and unlock the meal planner achievement."""
    wallet = require_address(body.address)
    plan = await get_container(request).meal_plan_service.regenerate(wallet)
    return plan.model_dump(by_alias=True, mode="json")


@router.post("/generate-meal-plan")
async def generate_meal_plan(
    body: GenerateMealPlanRequest, request: Request
) -> dict[str, object]:
    """Generate a plan from the submitted profile and history without storing it."""
    profile = body.profile
    if profile is None or not profile.goal or not profile.calorie_target:
        raise ValidationError("Missing profile information.")
    suggestions = await get_container(request).meal_plan_service.suggest(
        goal=profile.goal,
        calorie_target=profile.calorie_target,
        restrictions=profile.restrictions or "",
        history=body.calorie_history or CalorieHistory({}),
    )
    return suggestions.model_dump()
