"""
Password hashing, one-time codes and bearer tokens.

Responsibilities:
- Hash and verify passwords and OTPs with Argon2id
- Generate 6-digit numeric one-time codes
- Issue and decode HS256 JWTs carrying the user id and role
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from vhr.utils.role_permissions import validate_role
from vhr.utils.settings import get_settings

_hasher = PasswordHasher(time_cost=2, memory_cost=65536, parallelism=4, hash_len=32, type=Type.ID)

OTP_LENGTH = 6


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    role: str


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password: str, encoded_hash: Optional[str]) -> bool:
    if not password or not encoded_hash:
        return False
    try:
        return _hasher.verify(encoded_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def generate_otp(length: int = OTP_LENGTH) -> str:
    """Return a zero-padded numeric code, e.g. '042917'."""
    return "".join(secrets.choice("0123456789") for _ in range(length))


def create_access_token(user_id: int, role: str, *, now: Optional[datetime] = None) -> str:
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "role": role,
        "iat": issued,
        "exp": issued + timedelta(hours=settings.jwt_expires_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and verify a bearer token.

    Raises:
        jwt.InvalidTokenError: If the signature, expiry or payload is invalid,
            including a role claim outside the allowed roles
    """
    settings = get_settings()
    data = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    user_id = data.get("id")
    role = data.get("role")
    if not isinstance(user_id, int) or not isinstance(role, str):
        raise jwt.InvalidTokenError("Token payload is missing id or role")
    try:
        validate_role(role)
    except ValueError as e:
        raise jwt.InvalidTokenError(str(e)) from e
    return TokenPayload(user_id=user_id, role=role)
