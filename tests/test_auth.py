"""Tests for the user identity dependency."""
import datetime as dt

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from src.auth.dependencies import get_current_user_id
from src.auth.token_verifier import verify_access_token
from src.config.settings import settings


def _token(claims, secret=None):
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_valid_token_returns_sub():
    assert get_current_user_id(_bearer(_token({"sub": "user-42"}))) == "user-42"


def test_missing_token_falls_back_to_default_user(monkeypatch):
    monkeypatch.setattr(settings, "auth_required", False)
    assert get_current_user_id(None) == settings.default_user_id


def test_missing_token_rejected_when_auth_required(monkeypatch):
    monkeypatch.setattr(settings, "auth_required", True)
    with pytest.raises(HTTPException) as exc_info:
        get_current_user_id(None)
    assert exc_info.value.status_code == 401


def test_wrong_secret_rejected():
    with pytest.raises(HTTPException) as exc_info:
        get_current_user_id(_bearer(_token({"sub": "user-42"}, secret="a-completely-different-signing-secret")))
    assert exc_info.value.status_code == 401


def test_expired_token_is_invalid():
    expired = dt.datetime.now(dt.timezone.utc) - dt.timedelta(minutes=5)
    assert verify_access_token(_token({"sub": "user-42", "exp": expired})) is None


def test_token_without_sub_is_invalid():
    assert verify_access_token(_token({"name": "nobody"})) is None
