"""Invitation model: single-use codes that provision a tenant and its admin."""

from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin, as_utc


class InvitationStatus(str, PyEnum):
    """Transitions are one-way: PENDING -> USED or PENDING -> EXPIRED."""

    PENDING = "pending"
    USED = "used"
    EXPIRED = "expired"


class Invitation(Base, TimestampMixin):
    """
    Invitation issued by a superadmin to onboard a new restaurant.

    At most one non-expired PENDING invitation may exist per email. This is
    checked when the invitation is created, not by a database constraint.
    """

    __tablename__ = "invitations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(12), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    tenant_name: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[InvitationStatus] = mapped_column(
        Enum(InvitationStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=InvitationStatus.PENDING,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    created_by_user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    used_by_user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def is_expired(self, now: datetime) -> bool:
        return now > as_utc(self.expires_at)

    def __repr__(self) -> str:
        return f"<Invitation(code='{self.code}', status={self.status.value})>"
