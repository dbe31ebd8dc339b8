"""AI-backed analysis endpoints."""

import logging

from fastapi import APIRouter, Request

from caloai.api.dependencies import get_container
from caloai.api.models import AnalyzeImageRequest, RecommendFoodRequest
from caloai.domain.errors import ValidationError
from caloai.services.rewards import serialize_points_awarded

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post("/analyze-food")
@router.post("/analyze-image")
async def analyze_food(
    body: AnalyzeImageRequest, request: Request
) -> dict[str, object]:
    """Estimate calories and food items from a base64 image data URL.

    When an address is supplied the photo also earns upload points.
    """
    if body.image is None:
        raise ValidationError("Request body must contain an 'image' property.")
    container = get_container(request)
    analysis = await container.analysis_service.analyze_food(body.image)
    response: dict[str, object] = analysis.model_dump(by_alias=True)
    if body.address:
        awarded = container.rewards_service.record_meal_photo(body.address.strip())
        response["rewards"] = serialize_points_awarded(awarded)
    return response


@router.post("/recommend-food")
async def recommend_food(
    body: RecommendFoodRequest, request: Request
) -> dict[str, object]:
    """Return general suggestions for a goal and common foods."""
    if not body.health_goal or body.common_foods is None:
        raise ValidationError("Missing or invalid input data (goal, common foods).")
    recommendations = await get_container(request).analysis_service.recommend_foods(
        body.health_goal, body.common_foods
    )
    return recommendations.model_dump()
