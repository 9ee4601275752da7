"""Caller identity tokens.

Callers present a signed JWT whose ``sub`` claim is their account id.
Uses PyJWT for encoding and validation.
"""

from datetime import UTC, datetime, timedelta

import jwt
from pydantic import TypeAdapter, ValidationError

from votesmart_api.schemas.common import AccountId

_account_id_adapter = TypeAdapter(AccountId)


def create_access_token(
    account_id: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60,
) -> str:
    """Create a JWT access token identifying a caller account.

    Args:
        account_id: The caller's account id, stored as the token subject.
        secret_key: Secret key for signing.
        algorithm: JWT signing algorithm.
        expires_minutes: Token expiration in minutes.

    Returns:
        The encoded JWT string.
    """
    issued_at = datetime.now(UTC)
    payload = {
        "sub": account_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expires_minutes),
        "type": "access",
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
) -> dict:
    """Decode and validate a JWT token.

    Args:
        token: The JWT string to decode.
        secret_key: Secret key used for signing.
        algorithm: JWT signing algorithm.

    Returns:
        The decoded token payload.

    Raises:
        jwt.ExpiredSignatureError: If the token has expired.
        jwt.InvalidTokenError: If the token is invalid.
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])


def read_caller_account_id(token: str, secret_key: str, algorithm: str = "HS256") -> str:
    """Validate a caller token and return the account id it identifies.

    Raises:
        jwt.InvalidTokenError: If the token is invalid or expired, is not an
            access token, or its subject is not a valid account id.
    """
    payload = decode_token(token, secret_key, algorithm)
    if payload.get("type") != "access":
        msg = "Not an access token"
        raise jwt.InvalidTokenError(msg)
    account_id = payload.get("sub")
    if not isinstance(account_id, str) or not account_id:
        msg = "Token has no subject"
        raise jwt.InvalidTokenError(msg)
    try:
        return _account_id_adapter.validate_python(account_id)
    except ValidationError as e:
        msg = "Token subject is not a valid account id"
        raise jwt.InvalidTokenError(msg) from e
