"""Unit tests for FastAPI dependencies."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from votesmart_api.core.config import Settings
from votesmart_api.core.dependencies import get_caller_account_id
from votesmart_api.core.security import create_access_token


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCallerAccountId:
    """Tests for get_caller_account_id."""

    async def test_returns_token_subject(self, settings: Settings) -> None:
        token = create_access_token("registry-admin", settings.jwt_secret_key)
        assert await get_caller_account_id(_bearer(token), settings) == "registry-admin"

    async def test_missing_credentials(self, settings: Settings) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(None, settings)
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}

    async def test_invalid_token(self, settings: Settings) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(_bearer("garbage"), settings)
        assert exc_info.value.status_code == 401

    async def test_expired_token(self, settings: Settings) -> None:
        token = create_access_token("registry-admin", settings.jwt_secret_key, expires_minutes=-5)
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(_bearer(token), settings)
        assert exc_info.value.status_code == 401

    async def test_token_without_subject(self, settings: Settings) -> None:
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(minutes=5), "type": "access"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(_bearer(token), settings)
        assert exc_info.value.status_code == 401

    async def test_non_access_token_rejected(self, settings: Settings) -> None:
        token = jwt.encode(
            {"sub": "registry-admin", "exp": datetime.now(UTC) + timedelta(minutes=5), "type": "refresh"},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(_bearer(token), settings)
        assert exc_info.value.status_code == 401

    async def test_malformed_subject_rejected(self, settings: Settings) -> None:
        token = create_access_token("not a valid account", settings.jwt_secret_key)
        with pytest.raises(HTTPException) as exc_info:
            await get_caller_account_id(_bearer(token), settings)
        assert exc_info.value.status_code == 401
