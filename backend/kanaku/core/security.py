"""
Password hashing and access tokens for shop staff.

Tokens carry the user's email as ``sub`` and their id as ``user_id``.
"""

import bcrypt
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from kanaku.config import settings

ALGORITHM = "HS256"
BCRYPT_ROUNDS = 12


def _to_bytes(value) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a login password against the stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_to_bytes(plain_password), _to_bytes(hashed_password))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    hashed = bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def create_access_token(claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign the claims with an expiry (ACCESS_TOKEN_EXPIRE_MINUTES by default)."""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.utcnow() + lifetime}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the token's claims, or None when it is forged, malformed or expired."""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
