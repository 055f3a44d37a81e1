"""Pydantic schemas for account and session endpoints."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignUpRequest(BaseModel):
    """Request schema for account registration."""

    email: EmailStr
    password: str = Field(min_length=1)
    full_name: str
    role: Literal["admin", "user"] = "user"


class SignInRequest(BaseModel):
    """Request schema for sign-in."""

    email: EmailStr
    password: str


class ProfileUpdateRequest(BaseModel):
    full_name: str = Field(min_length=1)


class AccountResponse(BaseModel):
    """Response schema for account data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str
    role: str
    created_at: datetime


class SessionResponse(BaseModel):
    authenticated: bool
    account: Optional[AccountResponse] = None


class AuthTokenResponse(BaseModel):
    """Response schema for sign-up and sign-in."""

    access_token: str
    token_type: str = "bearer"
    account: AccountResponse
