"""Dependency injection: bearer-token identity and the acting user."""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from kiosk.core.policy import Actor
from kiosk.core.security import decode_access_token
from kiosk.db.base import get_db
from kiosk.models.user import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


async def get_current_actor(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> Actor:
    """
    Decode JWT and return the acting user.

    Raises 401 on an invalid or expired token, and when the account behind
    a still-valid token has been deleted.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        user_id = payload.get("sub")
        if user_id is None:
            raise credentials_exception
        actor = Actor(id=UUID(user_id))
    except (JWTError, ValueError):
        raise credentials_exception

    if await db.get(User, actor.id) is None:
        raise credentials_exception
    return actor
