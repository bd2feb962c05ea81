from app.models.system_message import SystemMessage
from app.repositories.tenant_scoped import TenantScopedRepository


class SystemMessageRepository(TenantScopedRepository[SystemMessage]):
    """Repository for SystemMessage model operations within one tenant"""

    model = SystemMessage

    def get_ordered(self, active_only: bool = False) -> list[SystemMessage]:
        query = self._query()
        if active_only:
            query = query.filter(SystemMessage.is_active.is_(True))
        return query.order_by(SystemMessage.placement, SystemMessage.sort_order, SystemMessage.id).all()
