"""User role enum for role-based access control."""

from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    """
    User roles with hierarchical permissions inside their tenant.

    Role Hierarchy (lowest to highest):
    0. VIEWER - Read-only access to backoffice data
    1. STAFF - Manage meals, categories and orders
    2. ADMIN - Restaurant owner: settings, deletions, system messages
    3. SUPERADMIN - Platform operator: tenants, invitations, users, stats

    A role satisfies every requirement at or below its own rank.
    """

    VIEWER = "viewer"
    STAFF = "staff"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @property
    def rank(self) -> int:
        return _ROLE_RANKS[self]

    def at_least(self, required: "UserRole") -> bool:
        return self.rank >= required.rank


_ROLE_RANKS = {
    UserRole.VIEWER: 0,
    UserRole.STAFF: 1,
    UserRole.ADMIN: 2,
    UserRole.SUPERADMIN: 3,
}
