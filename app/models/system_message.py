from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Boolean, Text, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin


class MessageType(str, PyEnum):
    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"
    PROMOTION = "promotion"


class SystemMessage(Base, TimestampMixin):
    """
    Short text shown on the public menu.

    ``placement`` names where the menu renders it (e.g. 'global_footer').
    """

    __tablename__ = "system_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    placement: Mapped[str] = mapped_column(String(100), nullable=False)
    message_type: Mapped[MessageType] = mapped_column(
        Enum(MessageType, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=MessageType.INFO,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
