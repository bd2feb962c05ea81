"""Tenant model for multi-tenant isolation."""

from sqlalchemy import String, Integer, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from app.models.base import Base, TimestampMixin
from app.models.subscription import SubscriptionPlan, SubscriptionStatus

if TYPE_CHECKING:
    from app.models.user import User


class Tenant(Base, TimestampMixin):
    """
    Multi-tenant isolation boundary: one restaurant.

    The slug is the sole routing key. It is the subdomain label of the
    public menu (``<slug>.viw-carta.com``) and the first path segment the
    edge gate rewrites tenant requests to. Changing it changes the public URL.

    All categories, meals, orders and system messages belong to a tenant.
    Plan and status are copied into session tokens at login.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(63), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    direction: Mapped[str] = mapped_column(String(200), nullable=False)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    subscription_plan: Mapped[SubscriptionPlan] = mapped_column(
        Enum(SubscriptionPlan, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=SubscriptionPlan.STANDARD,
    )
    subscription_status: Mapped[SubscriptionStatus] = mapped_column(
        Enum(SubscriptionStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=SubscriptionStatus.ACTIVE,
    )

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="tenant")

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug='{self.slug}')>"
