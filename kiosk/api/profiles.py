"""Profile endpoints. Profiles are created at registration and never deleted here."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.policy import Actor, Operation, authorize, get_visible
from kiosk.db.base import get_db, commit
from kiosk.models.profile import Profile
from kiosk.schemas.profile import ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
async def get_profile(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    profile = await get_visible(db, actor, Profile, actor.id)
    return ProfileResponse.model_validate(profile)


@router.patch("", response_model=ProfileResponse)
async def update_profile(
    body: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    profile = await get_visible(db, actor, Profile, actor.id)
    await authorize(db, actor, Operation.UPDATE, profile)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(profile, field, value)

    await commit(db)
    return ProfileResponse.model_validate(profile)
