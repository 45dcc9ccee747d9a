"""
Auth API routes — signup, verify, login, profile, password reset.

Route prefix: /auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import (
    get_account_service,
    get_current_account_id,
    get_reset_account_id,
)
from auth.schemas import (
    AccountRead,
    IdResponse,
    LoginRequest,
    MessageResponse,
    ProfileUpdateRequest,
    ResetConfirmRequest,
    ResetRequest,
    SignupRequest,
    TokenResponse,
)
from auth.service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=IdResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Register a new, unverified account."""
    account_id = await service.signup(req.name, req.email, req.password)
    return {"id": account_id}


@router.get("/verify/{code}", response_model=MessageResponse)
async def verify(
    code: str,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    await service.verify(code)
    return {"message": "Account verified"}


@router.post("/login", response_model=TokenResponse)
async def login(
    req: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    """Login with email + password."""
    token = await service.login(req.email, req.password)
    return {"auth": token}


@router.get("/me", response_model=AccountRead)
async def read_me(
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    account = await service.get_profile(account_id)
    return AccountRead.from_account(account)


@router.patch("/me", response_model=AccountRead)
async def update_me(
    req: ProfileUpdateRequest,
    account_id: str = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
) -> AccountRead:
    """Partial update of name and/or avatar. An empty or null avatar clears it."""
    avatar = req.avatar
    if avatar is None and "avatar" in req.model_fields_set:
        avatar = ""
    account = await service.update_profile(account_id, name=req.name, avatar=avatar)
    return AccountRead.from_account(account)


@router.post("/reset", response_model=TokenResponse)
async def request_reset(
    req: ResetRequest,
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    token = await service.request_reset(req.email)
    return {"auth": token}


@router.patch("/reset/{code}", response_model=MessageResponse)
async def confirm_reset(
    code: str,
    req: ResetConfirmRequest,
    account_id: str = Depends(get_reset_account_id),
    service: AccountService = Depends(get_account_service),
) -> Dict[str, Any]:
    await service.confirm_reset(account_id, code, req.password)
    return {"message": "Password updated"}
