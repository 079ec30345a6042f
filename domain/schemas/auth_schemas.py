from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from domain.schemas.base import APIModel


class SignupRequest(APIModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(APIModel):
    id: str
    name: str
    email: str
    created_at: Optional[datetime] = None


class AuthResponse(APIModel):
    token: str
    user: UserResponse
