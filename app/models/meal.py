from sqlalchemy import String, Integer, Boolean, Text, Numeric, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin


class Meal(Base, TimestampMixin):
    """
    Dish listed on a tenant's menu.

    Only the fields the public menu and orders need are modelled here;
    richer menu data (variants, nutrition, schedules) lives outside this core.
    """

    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    base_price: Mapped[float] = mapped_column(Numeric(precision=10, scale=2), nullable=False, default=0)
    compare_price: Mapped[float | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    show_in_menu: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_meals_tenant_category_order", "tenant_id", "category_id", "display_order"),
    )
