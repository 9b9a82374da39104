"""Credential verification: traveller bearer tokens and partner API keys."""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
import hmac
import logging

import jwt
from fastapi import Header

from wayfinder.config.settings import settings
from wayfinder.core.exceptions import ForbiddenError, UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    uid: str
    email: Optional[str] = None


def create_access_token(uid: str, email: str | None = None, expires_minutes: int = 60) -> str:
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": uid,
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    if email:
        payload["email"] = email
    return jwt.encode(payload, settings.security.jwt_secret, algorithm=settings.security.jwt_algorithm)


def verify_token(token: str) -> Principal:
    try:
        claims = jwt.decode(
            token,
            settings.security.jwt_secret,
            algorithms=[settings.security.jwt_algorithm],
        )
    except jwt.PyJWTError as e:
        logger.info(f"Rejected bearer token: {type(e).__name__}")
        raise UnauthorizedError("Unauthorized: Invalid token.") from None
    uid = claims.get("sub")
    if not uid:
        raise UnauthorizedError("Unauthorized: Invalid token payload.")
    return Principal(uid=str(uid), email=claims.get("email"))


async def get_current_principal(authorization: str | None = Header(default=None)) -> Principal:
    """FastAPI dependency resolving the ``Authorization: Bearer`` header."""
    if not authorization:
        raise UnauthorizedError("Unauthorized: No token provided.")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise UnauthorizedError("Unauthorized: Invalid authorization header format.")
    return verify_token(parts[1])


def is_valid_partner_key(api_key: str) -> bool:
    return any(
        hmac.compare_digest(api_key.encode("utf-8"), known.encode("utf-8"))
        for known in settings.security.partner_api_keys
    )


async def require_partner_api_key(x_api_key: str | None = Header(default=None)) -> str:
    """FastAPI dependency guarding partner routes with ``X-API-Key``."""
    if not x_api_key or not is_valid_partner_key(x_api_key):
        raise ForbiddenError("Forbidden: Invalid or missing API Key.")
    return x_api_key
