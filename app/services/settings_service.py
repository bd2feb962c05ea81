import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException, NotFoundException
from app.models.session_identity import SessionIdentity
from app.models.tenant import Tenant
from app.repositories.tenant_repository import TenantRepository
from app.schemas.settings_schemas import RestaurantSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    """Restaurant profile of the session's tenant"""

    def __init__(self, db: Session, identity: SessionIdentity):
        self.db = db
        self.identity = identity
        self.tenant_repo = TenantRepository(db)

    def get_settings(self) -> Tenant:
        tenant = self.tenant_repo.get_by_id(self.identity.tenant_id)
        if not tenant:
            raise NotFoundException("Restaurant not found")
        return tenant

    def update_settings(self, data: RestaurantSettingsUpdate) -> Tenant:
        """
        Update profile fields of the session's tenant.

        Raises:
            ConflictException: If the new name is used by another restaurant
        """
        tenant = self.get_settings()
        changes = data.model_dump(exclude_unset=True)

        new_name = changes.get("name")
        if new_name and new_name != tenant.name:
            existing = self.tenant_repo.get_by_name(new_name)
            if existing and existing.id != tenant.id:
                raise ConflictException("A restaurant with that name already exists")

        for field, value in changes.items():
            if value is None and field in ("name", "direction", "phone"):
                continue
            setattr(tenant, field, value)

        tenant = self.tenant_repo.update(tenant)
        logger.info("Settings updated for tenant_id=%s", tenant.id)
        return tenant
