"""Unit tests for caller identity tokens."""

import jwt
import pytest

from votesmart_api.core.security import create_access_token, decode_token, read_caller_account_id

SECRET = "test-secret-key-not-for-production"


class TestCallerTokens:
    """Tests for JWT creation and decoding."""

    def test_create_and_decode(self) -> None:
        token = create_access_token("registry-admin", SECRET)
        payload = decode_token(token, SECRET)
        assert payload["sub"] == "registry-admin"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_wrong_secret_rejected(self) -> None:
        token = create_access_token("registry-admin", SECRET)
        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token, "another-secret-key-that-is-long-enough")

    def test_expired_token_rejected(self) -> None:
        token = create_access_token("registry-admin", SECRET, expires_minutes=-1)
        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, SECRET)

    def test_garbage_rejected(self) -> None:
        with pytest.raises(jwt.InvalidTokenError):
            decode_token("not-a-token", SECRET)


class TestReadCallerAccountId:
    """Tests for read_caller_account_id."""

    def test_returns_subject(self) -> None:
        token = create_access_token("registry-admin", SECRET)
        assert read_caller_account_id(token, SECRET) == "registry-admin"

    def test_non_access_token_rejected(self) -> None:
        token = jwt.encode({"sub": "registry-admin", "type": "refresh"}, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError, match="Not an access token"):
            read_caller_account_id(token, SECRET)

    def test_missing_subject_rejected(self) -> None:
        token = jwt.encode({"type": "access"}, SECRET, algorithm="HS256")
        with pytest.raises(jwt.InvalidTokenError, match="no subject"):
            read_caller_account_id(token, SECRET)

    @pytest.mark.parametrize("subject", ["Registry Admin", "x" * 65, "a", "admin.", "ADMIN"])
    def test_malformed_subject_rejected(self, subject: str) -> None:
        token = create_access_token(subject, SECRET)
        with pytest.raises(jwt.InvalidTokenError, match="not a valid account id"):
            read_caller_account_id(token, SECRET)

    def test_longest_account_id_accepted(self) -> None:
        subject = "a" * 64
        assert read_caller_account_id(create_access_token(subject, SECRET), SECRET) == subject
