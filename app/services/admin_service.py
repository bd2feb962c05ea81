import logging
from datetime import datetime, UTC

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.invitation import InvitationStatus
from app.models.tenant import Tenant
from app.models.user import User
from app.repositories.category_repository import CategoryRepository
from app.repositories.invitation_repository import InvitationRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.tenant_repository import TenantRepository
from app.repositories.user_repository import UserRepository
from app.schemas.admin_schemas import SubscriptionUpdate, UserAdminUpdate

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class AdminService:
    """Platform console for superadmins: customers, users and stats"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)
        self.user_repo = UserRepository(db)
        self.invitation_repo = InvitationRepository(db)

    def _get_tenant(self, tenant_id: int) -> Tenant:
        tenant = self.tenant_repo.get_by_id(tenant_id)
        if not tenant:
            raise NotFoundException("Customer not found")
        return tenant

    def list_customers(self, q: str | None = None, page: int = 1, limit: int = 20) -> dict:
        """
        Page through customers sorted by name.

        Args:
            q: Optional substring matched on name or slug
            page: 1-based page number
            limit: Page size, capped at 100

        Returns:
            Dict with customers (each with its active user count), total, page and limit
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)
        tenants, total = self.tenant_repo.search(q, offset=(page - 1) * limit, limit=limit)
        counts = self.tenant_repo.active_user_counts([t.id for t in tenants])

        customers = [
            {
                "id": tenant.id,
                "slug": tenant.slug,
                "name": tenant.name,
                "subscription_plan": tenant.subscription_plan,
                "subscription_status": tenant.subscription_status,
                "active_users": counts.get(tenant.id, 0),
                "created_at": tenant.created_at,
            }
            for tenant in tenants
        ]
        return {"customers": customers, "total": total, "page": page, "limit": limit}

    def get_customer(self, tenant_id: int) -> dict:
        tenant = self._get_tenant(tenant_id)
        return {
            "tenant": tenant,
            "users": self.user_repo.get_by_tenant(tenant.id),
            "category_count": CategoryRepository(self.db, tenant.id).count(),
            "meal_count": MealRepository(self.db, tenant.id).count(),
            "order_count": OrderRepository(self.db, tenant.id).count(),
        }

    def update_subscription(self, tenant_id: int, data: SubscriptionUpdate) -> Tenant:
        """
        Change a customer's plan and/or status.

        Sessions already issued keep the old values until their users log in again.
        """
        tenant = self._get_tenant(tenant_id)
        if data.subscription_plan is not None:
            tenant.subscription_plan = data.subscription_plan
        if data.subscription_status is not None:
            tenant.subscription_status = data.subscription_status

        tenant = self.tenant_repo.update(tenant)
        logger.info(
            "Subscription of tenant_id=%s set to plan=%s status=%s",
            tenant.id,
            tenant.subscription_plan.value,
            tenant.subscription_status.value,
        )
        return tenant

    def update_user(self, user_id: int, data: UserAdminUpdate) -> User:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")

        if data.role is not None:
            user.role = data.role
        if data.is_active is not None:
            user.is_active = data.is_active

        user = self.user_repo.update(user)
        logger.info("User %s updated: role=%s is_active=%s", user.id, user.role.value, user.is_active)
        return user

    def get_stats(self) -> dict:
        now = datetime.now(UTC)
        return {
            "tenants": self.tenant_repo.count(),
            "active_users": self.user_repo.count_active(),
            "pending_invitations": self.invitation_repo.count_open(now),
            "used_invitations": self.invitation_repo.count_by_status(InvitationStatus.USED),
        }
