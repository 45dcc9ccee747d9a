"""
Request / response schemas for the ``/auth`` routes.

Request fields are all optional at the transport level; presence and
format are checked by ``utils.validators`` so failures come back as a
single 400 with per-field messages.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class SignupRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ProfileUpdateRequest(BaseModel):
    name: Optional[str] = None
    avatar: Optional[str] = None


class ResetRequest(BaseModel):
    email: Optional[str] = None


class ResetConfirmRequest(BaseModel):
    password: Optional[str] = None


class IdResponse(BaseModel):
    id: str


class TokenResponse(BaseModel):
    auth: str


class MessageResponse(BaseModel):
    message: str


class AccountRead(BaseModel):
    """Public view of an account; the password hash and codes are never included."""

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    verified: bool

    @classmethod
    def from_account(cls, account) -> "AccountRead":
        return cls(
            id=str(account.id),
            name=account.name,
            email=account.email,
            avatar=account.avatar,
            verified=bool(account.verified),
        )
