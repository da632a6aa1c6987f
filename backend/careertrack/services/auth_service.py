"""Credential helpers — bcrypt password hashing and signed session tokens."""

import time
from datetime import timedelta

import bcrypt
from itsdangerous import BadData, URLSafeSerializer

from careertrack.config import get_settings

TOKEN_SALT = "careertrack-auth"


def hash_password(password: str) -> str:
    """Hash a plaintext password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def _serializer() -> URLSafeSerializer:
    return URLSafeSerializer(get_settings().jwt_secret, salt=TOKEN_SALT)


def sign_token(user_id, expires_in: timedelta | None = None) -> str:
    """Issue a signed token carrying the user id and an absolute expiry.

    The lifetime defaults to ``JWT_EXPIRES_IN``. A missing or too-short
    secret never reaches this point: settings validation stops the
    process at startup.
    """
    lifetime = expires_in if expires_in is not None else get_settings().token_lifetime
    payload = {"sub": str(user_id), "exp": int(time.time() + lifetime.total_seconds())}
    return _serializer().dumps(payload)


def verify_token(token: str) -> str | None:
    """Return the user id inside a valid, unexpired token, else None.

    Tampered, malformed and expired tokens are indistinguishable to the
    caller.
    """
    try:
        payload = _serializer().loads(token)
    except BadData:
        return None

    if not isinstance(payload, dict):
        return None
    subject = payload.get("sub")
    expires_at = payload.get("exp")
    if not subject or not isinstance(expires_at, (int, float)):
        return None
    if expires_at <= time.time():
        return None
    return str(subject)
