from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class Credentials(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {"email": "owner@example.com", "password": "s3cret"}
        },
    }


class RegisterRequest(Credentials):
    name: Optional[str] = None


class SessionUser(BaseModel):
    """Normalized identity of the caller: id is always set, the rest may be absent."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None


class UserEnvelope(BaseModel):
    success: bool = True
    user: SessionUser


class LoginResponse(UserEnvelope):
    token: str

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "token": "<jwt>",
                "user": {"id": "u1", "email": "owner@example.com", "name": "Owner"},
            }
        }
    }
