from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr

from auth.domain.entities import Role


class LoginRequest(BaseModel):
    email: str
    password: str


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str
    role: str | None = None


class ResetPasswordRequest(BaseModel):
    password: str


class UserResponse(BaseModel):
    id: UUID
    email: str
    role: Role
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
