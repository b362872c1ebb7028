"""JWT token utilities."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import get_settings
from ..core.logging import get_logger
from ..core.redis_client import get_redis_client

logger = get_logger("security.jwt")


def create_access_token(
    user_id: UUID,
    email: str,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token; ``jti`` makes it individually revocable."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {
        "sub": str(user_id),
        "email": email,
        "username": username,
        "type": "access",
        "jti": uuid.uuid4().hex,
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def _decode(token: str) -> Optional[Dict[str, Any]]:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("type") != "access":
        return None
    return payload


async def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate an access token, rejecting blacklisted ones."""
    payload = _decode(token)
    if payload is None:
        return None

    jti = payload.get("jti")
    if jti and await get_redis_client().is_token_blacklisted(jti):
        logger.info("Rejected blacklisted token", extra={"jti": jti})
        return None
    return payload


async def get_user_id_from_token(token: str) -> Optional[UUID]:
    """Extract user ID from token."""
    payload = await decode_access_token(token)
    if not payload:
        return None

    try:
        return UUID(str(payload.get("sub")))
    except ValueError:
        return None


async def blacklist_token(token: str) -> bool:
    """Blacklist a token for the rest of its lifetime (logout)."""
    payload = _decode(token)
    if payload is None or not payload.get("jti") or not payload.get("exp"):
        return False

    remaining = int(payload["exp"] - datetime.now(timezone.utc).timestamp())
    if remaining <= 0:
        return False
    return await get_redis_client().add_to_blacklist(payload["jti"], remaining)
