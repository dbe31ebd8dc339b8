"""Calorie log endpoints."""

import logging
from datetime import date

from fastapi import APIRouter, Request

from caloai.api.dependencies import get_container, require_address
from caloai.api.models import SaveCaloriesRequest
from caloai.domain.calories import CalorieSummary
from caloai.domain.errors import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calories"])


@router.get("/calories")
async def get_calories(
    request: Request, address: str | None = None
) -> dict[str, object]:
    """Return the full date-keyed calorie history."""
    wallet = require_address(address)
    history = get_container(request).calorie_service.get_history(wallet)
    return {
        "calorieData": history.model_dump(by_alias=True, mode="json", exclude_none=True)
    }


@router.post("/calories")
async def save_calories(
    body: SaveCaloriesRequest, request: Request
) -> dict[str, object]:
    """Replace the calorie history for a wallet address."""
    wallet = require_address(body.address)
    if body.calorie_data is None:
        raise ValidationError("Invalid calorie data format")
    created = get_container(request).calorie_service.save_history(
        wallet, body.calorie_data
    )
    logger.info(
        "Saved calorie data",
        extra={"address": wallet, "days": len(body.calorie_data.root)},
    )
    return {
        "success": True,
        "message": "Calorie data created" if created else "Calorie data updated",
    }


@router.get("/calories/summary")
async def get_calorie_summary(
    request: Request, address: str | None = None, today: date | None = None
) -> dict[str, object]:
    """Return today's intake, the seven-day trend and common foods."""
    wallet = require_address(address)
    container = get_container(request)
    target = container.profile_service.get_profile(wallet).calorie_target_value()
    summary = container.calorie_service.get_summary(
        wallet, today=today, calorie_target=target
    )
    return _serialize_summary(summary)


def _serialize_summary(summary: CalorieSummary) -> dict[str, object]:
    return {
        "today": summary.today.isoformat(),
        "todayTotal": summary.today_total,
        "todayByMeal": summary.today_by_meal,
        "chartData": [
            {"date": day.day.isoformat(), "name": day.name, "calories": day.calories}
            for day in summary.last_7_days
        ],
        "weeklyTotal": summary.weekly_total,
        "weeklyAverage": summary.weekly_average,
        "commonFoods": summary.common_foods,
        "allLoggedFoods": summary.all_logged_foods,
        "hasTarget": summary.calorie_target is not None,
        "calorieTarget": summary.calorie_target,
    }
