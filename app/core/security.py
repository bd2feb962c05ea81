from datetime import datetime, timedelta, UTC
from functools import lru_cache

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.core.exceptions import UnauthorizedException
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.models.subscription import SubscriptionPlan, SubscriptionStatus

# bcrypt only considers the first 72 bytes
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return (password or "").encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Salted bcrypt hash with the configured cost factor."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash compared against when the identifier is unknown, so both paths cost one bcrypt check."""
    return hash_password("not-a-real-password")


def issue_session_token(identity: SessionIdentity, now: datetime | None = None) -> str:
    """
    Sign a session token embedding the identity claims.

    Args:
        identity: Claims to embed (user, tenant, role, plan, status)
        now: Issue time, defaults to the current time

    Returns:
        Encoded JWT valid for SESSION_MAX_AGE_SECONDS
    """
    issued_at = now or datetime.now(UTC)
    expires_at = issued_at + timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS)
    payload = {
        "sub": str(identity.user_id),
        "tenant_id": identity.tenant_id,
        "slug": identity.tenant_slug,
        "role": identity.role.value,
        "plan": identity.subscription_plan.value,
        "status": identity.subscription_status.value,
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def validate_session_token(token: str) -> SessionIdentity:
    """
    Decode and validate a session token.

    Args:
        token: Token from the session cookie or Authorization header

    Returns:
        SessionIdentity rebuilt from the token claims

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid session: {str(e)}")

    # jose only validates exp when it is present
    if payload.get("exp") is None:
        raise UnauthorizedException("Session token missing expiration")
    if payload.get("sub") is None:
        raise UnauthorizedException("Session token missing user identifier")

    try:
        issued_at = payload.get("iat")
        return SessionIdentity(
            user_id=int(payload["sub"]),
            tenant_id=int(payload["tenant_id"]),
            tenant_slug=str(payload.get("slug") or ""),
            role=UserRole(payload["role"]),
            subscription_plan=SubscriptionPlan(payload["plan"]),
            subscription_status=SubscriptionStatus(payload["status"]),
            issued_at=datetime.fromtimestamp(issued_at, UTC) if issued_at is not None else None,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedException("Invalid session: malformed claims")


def needs_refresh(identity: SessionIdentity, now: datetime | None = None) -> bool:
    """True once the token is older than SESSION_UPDATE_AGE_SECONDS."""
    if identity.issued_at is None:
        return True
    now = now or datetime.now(UTC)
    return now - identity.issued_at >= timedelta(seconds=settings.SESSION_UPDATE_AGE_SECONDS)


def refresh_session_token(identity: SessionIdentity, now: datetime | None = None) -> str:
    """Reissue the same claims with a new validity window."""
    return issue_session_token(identity, now=now)
