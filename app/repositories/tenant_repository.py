"""Repository for Tenant model operations."""

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models.tenant import Tenant
from app.models.user import User


class TenantRepository:
    """Repository for Tenant model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: int) -> Tenant | None:
        """
        Get tenant by ID.

        Args:
            tenant_id: Tenant ID

        Returns:
            Tenant object or None if not found
        """
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_slug(self, slug: str) -> Tenant | None:
        """
        Get tenant by its routing slug.

        Args:
            slug: Lowercase subdomain label

        Returns:
            Tenant object or None if not found
        """
        return self.db.query(Tenant).filter(Tenant.slug == slug).first()

    def get_by_name(self, name: str) -> Tenant | None:
        return self.db.query(Tenant).filter(func.lower(Tenant.name) == name.lower()).first()

    def search(self, q: str | None, offset: int, limit: int) -> tuple[list[Tenant], int]:
        """
        Page through tenants sorted by name.

        Args:
            q: Optional case-insensitive substring matched on name or slug
            offset: Rows to skip
            limit: Page size

        Returns:
            (tenants on this page, total matching tenants)
        """
        query = self.db.query(Tenant)
        if q:
            pattern = f"%{q.lower()}%"
            query = query.filter(or_(func.lower(Tenant.name).like(pattern), Tenant.slug.like(pattern)))
        total = query.count()
        tenants = query.order_by(Tenant.name).offset(offset).limit(limit).all()
        return tenants, total

    def active_user_counts(self, tenant_ids: list[int]) -> dict[int, int]:
        """Active users per tenant id"""
        if not tenant_ids:
            return {}
        rows = (
            self.db.query(User.tenant_id, func.count(User.id))
            .filter(User.tenant_id.in_(tenant_ids), User.is_active.is_(True))
            .group_by(User.tenant_id)
            .all()
        )
        return {tenant_id: count for tenant_id, count in rows}

    def count(self) -> int:
        return self.db.query(Tenant).count()

    def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant.

        Args:
            tenant: Tenant object to create

        Returns:
            Created Tenant object with ID populated
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def update(self, tenant: Tenant) -> Tenant:
        """
        Update an existing tenant.

        Args:
            tenant: Tenant object with updated fields

        Returns:
            Updated Tenant object
        """
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
