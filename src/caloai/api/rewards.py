"""Rewards endpoints."""

from fastapi import APIRouter, Request

from caloai.api.dependencies import get_container, require_address
from caloai.api.models import (
    AddPointsRequest,
    ClaimPointsRequest,
    UnlockAchievementRequest,
)
from caloai.domain.errors import ValidationError
from caloai.services.rewards import (
    serialize_achievement,
    serialize_points_awarded,
    serialize_rewards,
)

router = APIRouter(tags=["rewards"])


@router.get("/rewards")
async def get_rewards(
    request: Request, address: str | None = None
) -> dict[str, object]:
    """Return rewards state, initializing it on first access."""
    wallet = require_address(address)
    rewards = get_container(request).rewards_service.ensure_rewards(wallet)
    return serialize_rewards(rewards)


@router.post("/rewards")
async def add_points(body: AddPointsRequest, request: Request) -> dict[str, object]:
    """Append a point transaction."""
    wallet = require_address(body.address)
    if not body.action or not body.points:
        raise ValidationError("Missing action or points")
    result = get_container(request).rewards_service.add_points(
        wallet, body.action, body.points, body.description
    )
    return serialize_points_awarded(result)


@router.post("/rewards/achievements")
async def unlock_achievement(
    body: UnlockAchievementRequest, request: Request
) -> dict[str, object]:
    """Unlock a catalog achievement by id."""
    if not body.address or not body.achievement_id:
        raise ValidationError("Missing address or achievement ID")
    result = get_container(request).rewards_service.unlock_achievement(
        require_address(body.address), body.achievement_id
    )
    if not result.success:
        return {
            "success": False,
            "message": result.message,
            "achievement": serialize_achievement(result.achievement),
        }
    return {
        "success": True,
        "achievement": serialize_achievement(result.achievement),
        "pointsAwarded": result.points_awarded,
        "newTotalPoints": result.total_points,
    }


@router.post("/update-points")
async def claim_points(
    body: ClaimPointsRequest, request: Request, address: str | None = None
) -> dict[str, object]:
    """Reset the balance to zero after a confirmed token claim."""
    wallet = require_address(address or body.address)
    result = get_container(request).rewards_service.claim_and_reset_points(
        wallet, body.points, body.transaction_hash
    )
    return {
        "success": True,
        "message": "Claim already processed"
        if result.already_processed
        else "Points updated successfully",
        "updatedPoints": result.updated_points,
        "alreadyProcessed": result.already_processed,
    }
