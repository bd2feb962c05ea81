from enum import Enum as PyEnum
from sqlalchemy import String, Integer, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin


class OrderStatus(str, PyEnum):
    """Order status enumeration"""

    ACTIVE = "active"
    ON_HOLD = "on_hold"
    PAID = "paid"


class Order(Base, TimestampMixin):
    """
    Table order taken by staff.

    ``order_number`` comes from the tenant's ``orderNumber`` counter and is
    unique per tenant. Items are stored as a JSON list of
    ``{meal_id, name, unit_price, qty}``.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_by_user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order_number: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=OrderStatus.ACTIVE,
        index=True,
    )
    table_number: Mapped[str] = mapped_column(String(20), nullable=False, default="")
    items: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint("tenant_id", "order_number", name="uq_order_tenant_number"),
    )
