"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.core.errors import TokenExpiredError, TokenInvalidError
from app.models.account import MAX_ACCOUNT_ID, Role
from app.schemas.auth import TokenClaims

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. The random salt is embedded in the digest."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. A malformed hash verifies as False."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    sub: str | int,
    role: Role | str,
    ttl: timedelta | None = None,
) -> str:
    """Create a JWT access token with sub (account id), role, iat and exp = now + ttl."""
    now = datetime.now(UTC)
    if ttl is None:
        ttl = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": Role(role).value,
        "iat": now,
        "exp": now + ttl,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT; return its claims (account id, role, issued-at).

    Raises TokenExpiredError when the token is past exp, TokenInvalidError for a bad
    signature, a malformed token, or claims that do not describe an account.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise TokenInvalidError("Invalid token") from e

    try:
        account_id = int(payload["sub"])
        role = Role(payload.get("role"))
    except (TypeError, ValueError) as e:
        raise TokenInvalidError("Invalid token payload") from e
    if not 1 <= account_id <= MAX_ACCOUNT_ID:
        raise TokenInvalidError("Invalid token payload")
    issued_at = datetime.fromtimestamp(payload["iat"], tz=UTC)
    return TokenClaims(account_id=account_id, role=role, issued_at=issued_at)
