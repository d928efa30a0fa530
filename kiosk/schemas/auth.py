"""Auth request/response schemas."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


# ── Login ──────────────────────────────────────────
class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: UUID


# ── Register ───────────────────────────────────────
class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)


class RegisterResponse(BaseModel):
    user_id: UUID
    access_token: str
    token_type: str = "bearer"
    message: str = "User registered successfully"


# ── Current User ───────────────────────────────────
class MeResponse(BaseModel):
    id: UUID
    email: str
