from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from app.models.user import User


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_identifier(self, identifier: str) -> User | None:
        """
        Get user by email (case-insensitive) or username.

        Args:
            identifier: Email address or username typed on the login form

        Returns:
            User object or None if no user matches
        """
        value = identifier.strip()
        return (
            self.db.query(User)
            .filter(or_(func.lower(User.email) == value.lower(), User.username == value))
            .first()
        )

    def get_by_id(self, user_id: int) -> User | None:
        """Get user by internal ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_tenant(self, tenant_id: int) -> list[User]:
        return self.db.query(User).filter(User.tenant_id == tenant_id).order_by(User.id).all()

    def username_or_email_taken(self, username: str, email: str) -> bool:
        return (
            self.db.query(User)
            .filter(or_(User.username == username, func.lower(User.email) == email.lower()))
            .first()
            is not None
        )

    def count_active(self) -> int:
        return self.db.query(User).filter(User.is_active.is_(True)).count()

    def update(self, user: User) -> User:
        """Update existing user"""
        self.db.commit()
        self.db.refresh(user)
        return user
