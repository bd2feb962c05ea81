import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException, UnauthorizedException, ValidationException
from app.core.security import (
    dummy_password_hash,
    hash_password,
    issue_session_token,
    verify_password,
)
from app.models.session_identity import SessionIdentity
from app.models.user import User
from app.repositories.tenant_repository import TenantRepository
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class VerifiedUser:
    user_id: int
    email: str
    name: str


class AuthService:
    """Credential verification and session issuance"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.tenant_repo = TenantRepository(db)

    def _authenticate(self, identifier: str, password: str) -> User:
        user = self.user_repo.get_by_identifier(identifier or "")
        if user is None:
            # Same bcrypt cost as a real check
            verify_password(password, dummy_password_hash())
            logger.info("Login failed for identifier=%s", identifier)
            raise UnauthorizedException(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash) or not user.is_active:
            logger.info("Login failed for identifier=%s", identifier)
            raise UnauthorizedException(INVALID_CREDENTIALS)

        return user

    def verify_credentials(self, identifier: str, password: str) -> VerifiedUser:
        """
        Check an identifier/secret pair.

        Args:
            identifier: Email (case-insensitive) or username
            password: Plaintext secret, never stored or logged

        Returns:
            VerifiedUser with id, email and display name

        Raises:
            UnauthorizedException: Unknown identifier, wrong secret or
                inactive user, all with the same message
        """
        user = self._authenticate(identifier, password)
        return VerifiedUser(user_id=user.id, email=user.email, name=user.full_name)

    def build_identity(self, user: User) -> SessionIdentity:
        tenant = self.tenant_repo.get_by_id(user.tenant_id)
        if tenant is None:
            raise UnauthorizedException(INVALID_CREDENTIALS)
        return SessionIdentity(
            user_id=user.id,
            tenant_id=tenant.id,
            tenant_slug=tenant.slug,
            role=user.role,
            subscription_plan=tenant.subscription_plan,
            subscription_status=tenant.subscription_status,
        )

    def login(self, identifier: str, password: str) -> tuple[SessionIdentity, str]:
        """
        Verify credentials and issue a session token.

        Role, plan and status are snapshotted into the token; later
        changes are only visible after the next login.

        Returns:
            (identity, signed token)
        """
        user = self._authenticate(identifier, password)
        identity = self.build_identity(user)
        token = issue_session_token(identity)
        logger.info("Login succeeded for user_id=%s tenant_id=%s", user.id, user.tenant_id)
        return identity, token

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        """
        Replace the password of the session user.

        Raises:
            NotFoundException: If the user no longer exists
            ValidationException: If the current password is wrong or unchanged
        """
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundException("User not found")
        if not verify_password(current_password, user.password_hash):
            raise ValidationException("Current password is incorrect")
        if current_password == new_password:
            raise ValidationException("New password must differ from the current one")

        user.password_hash = hash_password(new_password)
        self.user_repo.update(user)
        logger.info("Password changed for user_id=%s", user.id)
