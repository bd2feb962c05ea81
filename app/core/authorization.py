"""Authorization gate: role rank, plan entitlement and subscription checks.

All checks are pure functions over an already validated ``SessionIdentity``
and raise typed exceptions that the handlers in ``app.main`` translate into
HTTP responses.
"""

import logging

from app.core.exceptions import (
    ForbiddenException,
    PlanRestrictionException,
    UnauthorizedException,
)
from app.core.permissions import FeatureKey, PLAN_LABELS, plan_allows
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.models.subscription import SubscriptionPlan, SubscriptionStatus

logger = logging.getLogger(__name__)

INACTIVE_STATUSES = (SubscriptionStatus.PAST_DUE, SubscriptionStatus.CANCELED)


def _log_denied(reason: str, identity: SessionIdentity, detail: str) -> None:
    logger.warning(
        "Access denied (%s): user_id=%s tenant_id=%s role=%s plan=%s %s",
        reason,
        identity.user_id,
        identity.tenant_id,
        identity.role.value,
        identity.subscription_plan.value,
        detail,
    )


def ensure_authenticated(identity: SessionIdentity | None) -> SessionIdentity:
    if identity is None:
        raise UnauthorizedException("Authentication required")
    return identity


def ensure_role(identity: SessionIdentity | None, min_role: UserRole) -> SessionIdentity:
    """
    Require a session whose role rank is at least ``min_role``.

    Raises:
        UnauthorizedException: If there is no valid session
        ForbiddenException: If the role rank is too low (code insufficient_role)
    """
    identity = ensure_authenticated(identity)
    if not identity.has_role(min_role):
        _log_denied("role", identity, f"required={min_role.value}")
        raise ForbiddenException(
            f"Role {min_role.value} or higher is required", code="insufficient_role"
        )
    return identity


def can(identity: SessionIdentity | None, feature: FeatureKey) -> bool:
    """Whether the session's plan includes ``feature``. No session means no."""
    if identity is None:
        return False
    return plan_allows(identity.subscription_plan, feature)


def ensure_feature(identity: SessionIdentity | None, feature: FeatureKey) -> SessionIdentity:
    """
    Require the session's plan to include ``feature``.

    Raises:
        UnauthorizedException: If there is no valid session
        PlanRestrictionException: If the plan lacks the feature (code plan_restriction)
    """
    identity = ensure_authenticated(identity)
    if not can(identity, feature):
        _log_denied("plan", identity, f"feature={feature.value}")
        raise PlanRestrictionException(
            f"This feature requires a {PLAN_LABELS[SubscriptionPlan.PREMIUM]} plan."
        )
    return identity


def is_subscription_blocked(identity: SessionIdentity) -> bool:
    if identity.is_superadmin():
        return False
    return identity.subscription_status in INACTIVE_STATUSES


def ensure_active_subscription(identity: SessionIdentity | None) -> SessionIdentity:
    """
    Block past-due and canceled tenants from mutating backoffice data.

    Superadmins bypass this check.
    """
    identity = ensure_authenticated(identity)
    if is_subscription_blocked(identity):
        _log_denied("subscription", identity, f"status={identity.subscription_status.value}")
        raise ForbiddenException(
            f"Subscription is {identity.subscription_status.value}", code="subscription_inactive"
        )
    return identity
