from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import settings
from app.core.authorization import ensure_active_subscription, ensure_feature, ensure_role
from app.core.exceptions import UnauthorizedException
from app.core.permissions import FeatureKey
from app.core.security import validate_session_token
from app.database import get_db
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.models.user import User
from app.repositories.user_repository import UserRepository

security = HTTPBearer(auto_error=False)


def _session_tokens(request: Request, credentials: HTTPAuthorizationCredentials | None) -> list[str]:
    """Candidate tokens: session cookie first, then Authorization: Bearer <token>"""
    tokens = []
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        tokens.append(cookie)
    if credentials is not None and credentials.credentials:
        tokens.append(credentials.credentials)
    return tokens


async def get_optional_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> SessionIdentity | None:
    """
    FastAPI dependency returning the session identity, or None.

    The first valid candidate wins; a stale cookie does not hide a valid
    Bearer token. Invalid or expired tokens are treated like missing ones.
    """
    for token in _session_tokens(request, credentials):
        try:
            return validate_session_token(token)
        except UnauthorizedException:
            continue
    return None


async def get_current_identity(
    identity: SessionIdentity | None = Depends(get_optional_identity),
) -> SessionIdentity:
    """
    FastAPI dependency requiring a valid session.

    Flow:
    1. Read token from the session cookie or Authorization: Bearer <token>
    2. Validate signature, expiry and claims
    3. Return the SessionIdentity the token carries

    Raises:
        UnauthorizedException: If no valid session is present
    """
    if identity is None:
        raise UnauthorizedException("Authentication required")
    return identity


def require_access(
    min_role: UserRole,
    feature: FeatureKey | None = None,
    require_active: bool = False,
):
    """
    Dependency factory combining the authorization checks of one route.

    Checks run in order: role rank, plan feature, subscription status.
    Usage: Depends(require_access(UserRole.STAFF, FeatureKey.MANAGE_PRODUCTS, require_active=True))
    """

    async def access_checker(
        identity: SessionIdentity | None = Depends(get_optional_identity),
    ) -> SessionIdentity:
        identity = ensure_role(identity, min_role)
        if feature is not None:
            ensure_feature(identity, feature)
        if require_active:
            ensure_active_subscription(identity)
        return identity

    return access_checker


def require_role(min_role: UserRole):
    """Usage: Depends(require_role(UserRole.ADMIN))"""
    return require_access(min_role)


def require_feature(feature: FeatureKey):
    """Any authenticated role whose plan includes ``feature``"""
    return require_access(UserRole.VIEWER, feature)


async def require_active_subscription(
    identity: SessionIdentity | None = Depends(get_optional_identity),
) -> SessionIdentity:
    return ensure_active_subscription(identity)


require_superadmin = require_role(UserRole.SUPERADMIN)


async def get_current_user(
    identity: SessionIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """
    Load the session's user row.

    Raises:
        UnauthorizedException: If the user was removed or deactivated since login
    """
    user = UserRepository(db).get_by_id(identity.user_id)
    if user is None or not user.is_active:
        raise UnauthorizedException("Authentication required")
    return user
