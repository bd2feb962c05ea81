"""Identity carried by a session token."""

from dataclasses import dataclass
from datetime import datetime

from app.models.role import UserRole
from app.models.subscription import SubscriptionPlan, SubscriptionStatus


@dataclass(frozen=True)
class SessionIdentity:
    """
    Authorization context for one request, decoded from the session token.

    Built from the User and its Tenant at login and embedded in the signed
    token. It is never re-read from the database during the token lifetime,
    so a role or plan change only shows up after the next login.

    Attributes:
        user_id: Authenticated user id
        tenant_id: The only tenant id handlers may scope reads and writes by
        tenant_slug: Routing key of the user's tenant
        role: The user's role within the tenant
        subscription_plan: Tenant plan at login time
        subscription_status: Tenant subscription status at login time
        issued_at: Token ``iat``
        expires_at: Token ``exp``
    """

    user_id: int
    tenant_id: int
    tenant_slug: str
    role: UserRole
    subscription_plan: SubscriptionPlan
    subscription_status: SubscriptionStatus
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    def has_role(self, required_role: UserRole) -> bool:
        """Check if user's role meets or exceeds required role."""
        return self.role.at_least(required_role)

    def is_superadmin(self) -> bool:
        return self.role == UserRole.SUPERADMIN

    def __repr__(self) -> str:
        return (
            f"<SessionIdentity(user_id={self.user_id}, tenant_id={self.tenant_id}, "
            f"role={self.role.value}, plan={self.subscription_plan.value})>"
        )
