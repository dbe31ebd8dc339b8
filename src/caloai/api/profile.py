"""Profile endpoints."""

from fastapi import APIRouter, Request

from caloai.api.dependencies import get_container, require_address
from caloai.api.models import SaveProfileRequest
from caloai.domain.errors import ValidationError

router = APIRouter(tags=["profile"])


@router.get("/profile")
async def get_profile(
    request: Request, address: str | None = None
) -> dict[str, object]:
    """Return the stored profile or the default one."""
    wallet = require_address(address)
    profile = get_container(request).profile_service.get_profile(wallet)
    return profile.model_dump(by_alias=True, mode="json")


@router.post("/profile")
async def save_profile(body: SaveProfileRequest, request: Request) -> dict[str, object]:
    """Replace the profile for a wallet address."""
    wallet = require_address(body.address)
    if body.profile is None:
        raise ValidationError("Invalid profile data format")
    created = get_container(request).profile_service.save_profile(wallet, body.profile)
    return {
        "success": True,
        "message": "Profile created" if created else "Profile updated",
        "profileComplete": body.profile.is_complete,
    }


@router.get("/profile/targets")
async def get_macro_targets(
    request: Request, address: str | None = None
) -> dict[str, object]:
    """Return daily macro targets derived from the calorie target."""
    wallet = require_address(address)
    targets = get_container(request).profile_service.get_macro_targets(wallet)
    return targets.model_dump(by_alias=True)
