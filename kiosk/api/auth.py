"""Authentication endpoints: register, login, current user."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.deps import get_current_actor
from kiosk.core.policy import Actor
from kiosk.core.security import verify_password, create_access_token
from kiosk.db.base import get_db
from kiosk.models.user import User
from kiosk.schemas.auth import (
    LoginRequest,
    TokenResponse,
    RegisterRequest,
    RegisterResponse,
    MeResponse,
)
from kiosk.services.provisioning import provision_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate via email + password, return JWT."""
    result = await db.execute(select(User).where(User.email == body.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(body.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return TokenResponse(access_token=create_access_token(user.id), user_id=user.id)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Self-service sign-up: account, profile and trial subscription in one go."""
    user = await provision_user(db, email=body.email, password=body.password)
    return RegisterResponse(user_id=user.id, access_token=create_access_token(user.id))


@router.get("/me", response_model=MeResponse)
async def get_me(
    actor: Actor = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
):
    user = await db.get(User, actor.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return MeResponse(id=user.id, email=user.email)
