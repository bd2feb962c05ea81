from datetime import datetime

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from app.models.invitation import Invitation, InvitationStatus


class InvitationRepository:
    """Repository for Invitation model operations (platform-wide, not tenant-scoped)"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, invitation_id: int) -> Invitation | None:
        return self.db.query(Invitation).filter(Invitation.id == invitation_id).first()

    def get_by_code(self, code: str) -> Invitation | None:
        """Get invitation by code; codes are stored uppercase"""
        return self.db.query(Invitation).filter(Invitation.code == code.strip().upper()).first()

    def get_open_for_email(self, email: str, now: datetime) -> Invitation | None:
        """Pending invitation for ``email`` that has not expired yet"""
        return (
            self.db.query(Invitation)
            .filter(
                func.lower(Invitation.email) == email.lower(),
                Invitation.status == InvitationStatus.PENDING,
                Invitation.expires_at > now,
            )
            .first()
        )

    def get_all(self, status: InvitationStatus | None = None) -> list[Invitation]:
        """Invitations newest first"""
        query = self.db.query(Invitation)
        if status is not None:
            query = query.filter(Invitation.status == status)
        return query.order_by(Invitation.created_at.desc(), Invitation.id.desc()).all()

    def count_open(self, now: datetime) -> int:
        return (
            self.db.query(Invitation)
            .filter(Invitation.status == InvitationStatus.PENDING, Invitation.expires_at > now)
            .count()
        )

    def count_by_status(self, status: InvitationStatus) -> int:
        return self.db.query(Invitation).filter(Invitation.status == status).count()

    def add(self, invitation: Invitation) -> Invitation:
        """Stage a new invitation; flushes so unique code collisions surface here"""
        self.db.add(invitation)
        self.db.flush()
        return invitation

    def mark_used(self, invitation_id: int, user_id: int, now: datetime) -> bool:
        """
        Transition PENDING -> USED.

        Conditional on the row still being pending, so of two concurrent
        redemptions only one updates a row. Does not commit.

        Returns:
            True if this call performed the transition
        """
        result = self.db.execute(
            update(Invitation)
            .where(Invitation.id == invitation_id, Invitation.status == InvitationStatus.PENDING)
            .values(status=InvitationStatus.USED, used_by_user_id=user_id, used_at=now, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def mark_expired(self, invitation: Invitation) -> Invitation:
        invitation.status = InvitationStatus.EXPIRED
        self.db.commit()
        self.db.refresh(invitation)
        return invitation

    def delete(self, invitation: Invitation) -> None:
        self.db.delete(invitation)
        self.db.commit()
