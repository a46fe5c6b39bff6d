"""
Security utilities.

Password hashing, JWT issue/verify for the three principal kinds.
"""

from __future__ import annotations

import re
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any, Literal, TypedDict

import bcrypt as _bcrypt
from jose import JWTError, jwt

from backoffice.core.config import settings

PrincipalKind = Literal["user", "manager", "employee"]

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


class InvalidToken(Exception):
    """Raised for any token that cannot be trusted: bad signature, malformed, expired."""


class TokenClaims(TypedDict):
    id: str
    type: str


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    password_bytes = password.encode("utf-8")[:72]
    salt = _bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return _bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plaintext password against a bcrypt hash. A missing hash never matches."""
    if not hashed_password:
        return False
    password_bytes = plain_password.encode("utf-8")[:72]
    return _bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def generate_password() -> str:
    """Random 12-character hex password for employees created without one."""
    return secrets.token_hex(6)


# ---------------------------------------------------------------------------
# JWT tokens
# ---------------------------------------------------------------------------

def parse_duration(value: str) -> timedelta:
    """
    Parse a lifetime such as ``7d``, ``12h``, ``30m`` or ``3600``.

    Raises:
        ValueError: If the string is not a recognised duration.
    """
    match = _DURATION_RE.match(value)
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def create_access_token(
    principal_id: str,
    kind: PrincipalKind = "user",
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed JWT for a principal.

    Args:
        principal_id: The principal's UUID as string.
        kind: Principal table the id belongs to.
        expires_delta: Override of the configured JWT_EXPIRE lifetime.

    Returns:
        Signed JWT string.
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta if expires_delta is not None else parse_duration(settings.JWT_EXPIRE))
    payload: dict[str, Any] = {
        "id": principal_id,
        "type": kind,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT access token.

    Tokens minted before principal kinds existed carry no ``type``; they are
    treated as ``user`` tokens.

    Raises:
        InvalidToken: If the token is invalid, expired, tampered or has no id.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    principal_id = payload.get("id")
    if not principal_id:
        raise InvalidToken("Token has no principal id")

    return TokenClaims(id=str(principal_id), type=str(payload.get("type") or "user"))
