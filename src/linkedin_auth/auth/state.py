"""CSRF state tokens and the signed cookie that carries them."""

import base64
import logging
import secrets

from itsdangerous import BadSignature, URLSafeTimedSerializer

logger = logging.getLogger(__name__)

STATE_COOKIE_NAME = "linkedin_auth_state"

_SALT = "linkedin-auth-state"


def generate_state() -> str:
    """Generate a random state value (16 bytes, base64)."""
    return base64.b64encode(secrets.token_bytes(16)).decode()


def _get_serializer(secret: str) -> URLSafeTimedSerializer:
    """Get serializer for the state cookie."""
    return URLSafeTimedSerializer(secret, salt=_SALT)


def sign_state(state: str, secret: str) -> str:
    """Seal a state value for storage in the state cookie."""
    return _get_serializer(secret).dumps(state)


def load_state(cookie: str | None, secret: str, max_age: int) -> str | None:
    """
    Unseal the state cookie.

    Returns None when the cookie is absent, tampered with, or older than
    max_age seconds.
    """
    if not cookie:
        return None

    try:
        state = _get_serializer(secret).loads(cookie, max_age=max_age)
    except BadSignature as e:
        # SignatureExpired is a BadSignature subclass
        logger.warning(f"Rejected state cookie: {e}")
        return None

    return state if isinstance(state, str) else None
