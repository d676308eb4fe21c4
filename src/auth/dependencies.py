# src/auth/dependencies.py
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.auth.token_verifier import verify_access_token
from src.config.settings import settings


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    bearer: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Owner id for tracker queries.
    - Bearer token: its `sub` claim (401 if the token does not verify)
    - no token: settings.default_user_id, unless settings.auth_required
    """
    if bearer is None:
        if settings.auth_required:
            raise HTTPException(
                status.HTTP_401_UNAUTHORIZED,
                "Missing Authorization header",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return settings.default_user_id

    payload = verify_access_token(bearer.credentials)
    if payload is None:
        raise HTTPException(
            status.HTTP_401_UNAUTHORIZED,
            "Invalid or expired access token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return str(payload["sub"])
