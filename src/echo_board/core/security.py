"""Admin credential checks and token helpers."""
from __future__ import annotations

import hmac
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from echo_board.core.settings import Settings, settings

ADMIN_SUBJECT = "admin"


def verify_admin_password(candidate: str, config: Settings = settings) -> bool:
    """Return True if `candidate` matches the configured admin password."""
    return hmac.compare_digest(candidate.encode("utf-8"), config.admin_password.encode("utf-8"))


def create_admin_token(config: Settings = settings) -> str:
    """Create a signed JWT granting admin access until it expires."""
    expire = datetime.now(UTC) + timedelta(minutes=config.admin_token_expire_minutes)
    to_encode: dict[str, object] = {"sub": ADMIN_SUBJECT, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        config.secret_key,
        algorithm=config.jwt_algorithm,
    )
    return encoded_jwt


def is_admin_token(token: str, config: Settings = settings) -> bool:
    """Return True if `token` is an unexpired admin JWT signed with our key."""
    try:
        payload = jwt.decode(token, config.secret_key, algorithms=[config.jwt_algorithm])
    except JWTError:
        return False
    return payload.get("sub") == ADMIN_SUBJECT
