import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, ValidationException
from app.models.order import Order, OrderStatus
from app.models.session_identity import SessionIdentity
from app.repositories.counter_repository import CounterRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.order_repository import OrderRepository
from app.schemas.order_schemas import OrderCreate, OrderItemCreate

logger = logging.getLogger(__name__)

ORDER_NUMBER_KEY = "orderNumber"


class OrderService:
    """Service for table orders, scoped to the session's tenant"""

    def __init__(self, db: Session, identity: SessionIdentity):
        self.db = db
        self.identity = identity
        self.repo = OrderRepository(db, identity.tenant_id)
        self.meal_repo = MealRepository(db, identity.tenant_id)
        self.counters = CounterRepository(db, identity.tenant_id)

    def _line_item(self, item: OrderItemCreate) -> dict:
        """
        Snapshot a meal into an order line.

        Raises:
            NotFoundException: If the meal does not exist in this tenant
            ValidationException: If the meal is currently unavailable
        """
        meal = self.meal_repo.get(item.meal_id)
        if not meal:
            raise NotFoundException(f"Meal {item.meal_id} not found")
        if not meal.is_available:
            raise ValidationException(f"Meal '{meal.name}' is not available")
        return {
            "meal_id": meal.id,
            "name": meal.name,
            "unit_price": str(meal.base_price),
            "qty": item.qty,
        }

    def list_orders(self, status: OrderStatus | None = None, limit: int = 50, offset: int = 0) -> list[Order]:
        return self.repo.get_filtered(status=status, limit=limit, offset=offset)

    def get_order(self, order_id: int) -> Order:
        order = self.repo.get(order_id)
        if not order:
            raise NotFoundException("Order not found")
        return order

    def create_order(self, data: OrderCreate) -> Order:
        """
        Create an order numbered from the tenant's order counter.

        Items are validated before a number is allocated, so failed
        requests do not burn order numbers.
        """
        items = [self._line_item(item) for item in data.items]
        order_number = self.counters.next_value(ORDER_NUMBER_KEY)

        order = Order(
            created_by_user_id=self.identity.user_id,
            order_number=order_number,
            table_number=data.table_number,
            items=items,
        )
        order = self.repo.add(order)
        logger.info("Order #%s created in tenant_id=%s", order.order_number, self.identity.tenant_id)
        return order

    def add_item(self, order_id: int, item: OrderItemCreate) -> Order:
        order = self.get_order(order_id)
        # Reassign so the JSON column is flagged dirty
        order.items = [*order.items, self._line_item(item)]
        return self.repo.update(order)
