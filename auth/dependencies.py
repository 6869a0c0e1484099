"""
FastAPI dependencies for authentication.

``get_current_identity`` is the only way a protected route learns who the
caller is: the identity comes from the verified bearer token, and FastAPI
caches it for the rest of the request.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auth.jwt import InvalidToken, verify_token
from auth.models import Identity
from config.settings import config
from utils.errors import InvalidCredential, MissingCredential

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def resolve_identity(credentials: Optional[HTTPAuthorizationCredentials]) -> Identity:
    """Raise ``MissingCredential`` / ``InvalidCredential`` or return the identity."""
    if credentials is None or not credentials.credentials:
        raise MissingCredential("Access token required")
    try:
        claims = verify_token(credentials.credentials)
    except InvalidToken as exc:
        logger.info("Rejected bearer token: %s", exc.reason)
        raise InvalidCredential("Invalid or expired token") from exc
    return Identity(email=claims.email, user_id=claims.user_id)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Identity:
    """
    Extract and verify the Bearer token, returning the caller ``Identity``.

    401 when no token is sent, 403 when it does not verify.
    """
    try:
        identity = resolve_identity(credentials)
    except MissingCredential as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        )
    except InvalidCredential as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))

    return identity


async def translate_access(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
) -> Optional[Identity]:
    """Gate for the translation proxy: open unless ``translate_requires_auth``."""
    if not config.translate_requires_auth:
        return None
    return await get_current_identity(credentials)
