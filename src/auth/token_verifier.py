# src/auth/token_verifier.py
from typing import Optional

import jwt

from src.config.settings import settings


def verify_access_token(token: str) -> Optional[dict]:
    """
    Access token check:
    - signature / exp against settings.jwt_secret
    - `sub` claim present (used as the record owner id)
    Returns the payload, or None if the token is unusable.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError:
        return None

    if not payload.get("sub"):
        return None
    return payload
