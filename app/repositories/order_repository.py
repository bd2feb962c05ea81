from app.models.order import Order, OrderStatus
from app.repositories.tenant_scoped import TenantScopedRepository


class OrderRepository(TenantScopedRepository[Order]):
    """Repository for Order model operations within one tenant"""

    model = Order

    def get_filtered(self, status: OrderStatus | None = None, limit: int = 50, offset: int = 0) -> list[Order]:
        """Orders newest first, optionally filtered by status"""
        query = self._query()
        if status is not None:
            query = query.filter(Order.status == status)
        return query.order_by(Order.order_number.desc()).offset(offset).limit(limit).all()
