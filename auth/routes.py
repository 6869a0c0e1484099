"""
Auth API routes — register, login, me.

Route prefix: /api/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import get_current_identity
from auth.jwt import create_token
from auth.models import Identity
from auth.password import dummy_verify, hash_password, verify_password
from database.session import get_db_session
from database.users import find_user_by_email, insert_user, update_last_login
from utils.errors import AuthenticationFailure, DuplicateIdentity
from utils.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

_INVALID_LOGIN = "Invalid email or password"


async def _authenticate(session: AsyncSession, email: str, password: str):
    """Return the matching ``User`` or raise ``AuthenticationFailure``."""
    user = await find_user_by_email(session, email)

    if user is None:
        # Same bcrypt cost as a wrong password, so timing does not reveal
        # which emails are registered.
        dummy_verify(password)
        raise AuthenticationFailure(_INVALID_LOGIN)

    try:
        valid = verify_password(password, user.password_hash)
    except ValueError:
        logger.error("Stored password hash for %s is malformed", user.email)
        valid = False
    if not valid:
        raise AuthenticationFailure(_INVALID_LOGIN)
    return user


def _auth_payload(user) -> Dict[str, Any]:
    return {
        "success": True,
        "token": create_token(user.email, str(user.user_id)),
        "user": {"email": user.email, "name": user.name},
    }


@router.post("/register", response_model=AuthResponse)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """Register a new user and return a token for it."""
    if await find_user_by_email(session, req.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )

    try:
        user = await insert_user(
            session,
            email=req.email,
            password_hash=hash_password(req.password),
            name=req.display_name(),
        )
    except DuplicateIdentity as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    logger.info("Registered user %s (%s)", user.email, user.user_id)
    return _auth_payload(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """Login with email + password."""
    try:
        user = await _authenticate(session, req.email, req.password)
    except AuthenticationFailure as exc:
        logger.info("Failed login for %s", req.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))

    await update_last_login(session, user.email)
    logger.info("Login: %s (%s)", user.email, user.user_id)
    return _auth_payload(user)


@router.get("/me", response_model=MeResponse)
async def me(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    """Profile of the authenticated user (never includes the password hash)."""
    user = await find_user_by_email(session, identity.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return {"email": user.email, "name": user.name, "created_at": user.created_at}
