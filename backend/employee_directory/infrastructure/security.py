"""Security Primitives — bcrypt password hashing and JWT session tokens.

Invariants:
    - Passwords are never stored or logged in plain text
    - Tokens carry sub=<username> and an exp claim; expired or tampered tokens are rejected
    - decode_access_token raises AuthenticationError, never a jose exception

Design Decisions:
    - bcrypt directly (no passlib): one algorithm, no plugin registry
    - Passwords truncated to 72 bytes before hashing: bcrypt's hard input limit
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from employee_directory.core.errors import AuthenticationError


def _prepare_password(password: str) -> bytes:
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_prepare_password(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            _prepare_password(plain_password), hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False


def create_access_token(
    subject: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: timedelta = timedelta(minutes=60),
) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    return jwt.encode({"sub": subject, "exp": expire}, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> str:
    """Return the token subject (username)."""
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise AuthenticationError("Session expired or invalid") from e
    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Session expired or invalid")
    return subject
