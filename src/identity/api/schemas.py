"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class SignUpRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Jane Doe",
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class LogoutRequest(BaseModel):
    token: str = Field(..., max_length=128)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    name: str | None = None
    email: str
    roles: list[str] = []
    is_email_verified: bool = False


class TokenResponse(BaseModel):
    value: str
    user_id: str
    expires_at: datetime


class StatusResponse(BaseModel):
    status: str = "ok"
