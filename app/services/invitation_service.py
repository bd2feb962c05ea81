import logging
import secrets
import string
from datetime import datetime, timedelta, UTC

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import (
    ConflictException,
    GoneException,
    NotFoundException,
    ValidationException,
)
from app.core.security import hash_password
from app.models.category import Category
from app.models.invitation import Invitation, InvitationStatus
from app.models.meal import Meal
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.models.subscription import SubscriptionPlan, SubscriptionStatus
from app.models.tenant import Tenant
from app.models.user import User
from app.repositories.invitation_repository import InvitationRepository
from app.repositories.tenant_repository import TenantRepository
from app.repositories.user_repository import UserRepository
from app.routing.host_resolver import HostConfig, is_valid_slug
from app.schemas.invitation_schemas import InvitationCreate, InvitationRegisterRequest
from app.services.category_service import slugify

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 5

# (name, sort order, template meal name, template meal description)
DEFAULT_MENU = [
    ("Entradas", 1, "[Agregar tu entrada favorita]", "Describe tu entrada aquí"),
    ("Platos Principales", 2, "[Agregar tu especialidad]", "Tu plato estrella va aquí"),
    ("Bebidas", 3, "[Agregar bebida]", "Bebida refrescante"),
    ("Postres", 4, "[Agregar postre]", "Dulce final perfecto"),
]


def generate_invitation_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


class InvitationService:
    """Invitation lifecycle: create, validate, redeem, delete"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = InvitationRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.user_repo = UserRepository(db)

    def list_invitations(self, status: InvitationStatus | None = None) -> list[Invitation]:
        return self.repo.get_all(status=status)

    def create_invitation(self, data: InvitationCreate, identity: SessionIdentity) -> Invitation:
        """
        Issue a new invitation code for ``data.email``.

        Args:
            data: Target email, restaurant name and notes
            identity: Creating superadmin; its user id is recorded

        Raises:
            ConflictException: If a non-expired pending invitation exists for the email
        """
        now = datetime.now(UTC)
        email = data.email.lower()
        if self.repo.get_open_for_email(email, now):
            raise ConflictException("A pending invitation already exists for this email")

        for _ in range(MAX_CODE_ATTEMPTS):
            invitation = Invitation(
                code=generate_invitation_code(),
                email=email,
                tenant_name=data.restaurant_name,
                status=InvitationStatus.PENDING,
                expires_at=now + timedelta(days=settings.INVITATION_TTL_DAYS),
                created_by_user_id=identity.user_id,
                notes=data.notes,
            )
            try:
                self.repo.add(invitation)
                self.db.commit()
            except IntegrityError:
                # Code collision, try a fresh one
                self.db.rollback()
                continue
            self.db.refresh(invitation)
            logger.info("Invitation id=%s created for %s by user_id=%s", invitation.id, email, identity.user_id)
            return invitation

        raise ConflictException("Could not allocate a unique invitation code")

    def _usable(self, code: str) -> Invitation:
        """
        Look up an invitation that can still be redeemed.

        An expired pending invitation is marked EXPIRED on the way out.

        Raises:
            NotFoundException: Unknown code
            GoneException: Already used or expired
        """
        invitation = self.repo.get_by_code(code)
        if not invitation:
            raise NotFoundException("Invitation not found")

        if invitation.status == InvitationStatus.USED:
            raise GoneException("Invitation has already been used")
        if invitation.status == InvitationStatus.EXPIRED:
            raise GoneException("Invitation has expired")
        if invitation.is_expired(datetime.now(UTC)):
            self.repo.mark_expired(invitation)
            logger.info("Invitation id=%s expired", invitation.id)
            raise GoneException("Invitation has expired")

        return invitation

    def validate_code(self, code: str) -> Invitation:
        return self._usable(code)

    def register(self, data: InvitationRegisterRequest) -> tuple[Tenant, User]:
        """
        Redeem an invitation: create the restaurant, its admin user and a
        starter menu, and mark the invitation used. All in one transaction.

        Raises:
            NotFoundException / GoneException: As for validation
            ValidationException: Email mismatch or invalid slug
            ConflictException: Slug, restaurant name, username or email taken
        """
        invitation = self._usable(data.code)

        email = data.email.lower()
        if email != invitation.email.lower():
            raise ValidationException("Email must match the invitation")

        slug = slugify(data.slug)
        if not is_valid_slug(slug) or slug in HostConfig.from_settings(settings).reserved_labels:
            raise ValidationException("Invalid restaurant slug")
        if self.tenant_repo.get_by_slug(slug):
            raise ConflictException("A restaurant with that slug already exists")
        if self.tenant_repo.get_by_name(data.restaurant_name):
            raise ConflictException("A restaurant with that name already exists")
        if self.user_repo.username_or_email_taken(data.username, email):
            raise ConflictException("Username or email already exists")

        now = datetime.now(UTC)
        try:
            tenant = Tenant(
                slug=slug,
                name=data.restaurant_name,
                direction=data.direction,
                phone=data.phone,
                description=data.description,
                subscription_plan=SubscriptionPlan.STANDARD,
                subscription_status=SubscriptionStatus.ACTIVE,
            )
            self.db.add(tenant)
            self.db.flush()

            user = User(
                full_name=data.full_name,
                username=data.username,
                email=email,
                password_hash=hash_password(data.password),
                tenant_id=tenant.id,
                role=UserRole.ADMIN,
                is_active=True,
            )
            self.db.add(user)
            self.db.flush()

            self._create_starter_menu(tenant.id)

            if not self.repo.mark_used(invitation.id, user.id, now):
                self.db.rollback()
                raise GoneException("Invitation has already been used")

            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictException("Restaurant or user already exists")

        self.db.refresh(tenant)
        self.db.refresh(user)
        logger.info("Invitation id=%s redeemed: tenant_id=%s user_id=%s", invitation.id, tenant.id, user.id)
        return tenant, user

    def _create_starter_menu(self, tenant_id: int) -> None:
        for name, order, meal_name, meal_description in DEFAULT_MENU:
            category = Category(
                tenant_id=tenant_id,
                name=name,
                slug=slugify(name),
                code=order,
                sort_order=order,
            )
            self.db.add(category)
            self.db.flush()
            self.db.add(
                Meal(
                    tenant_id=tenant_id,
                    category_id=category.id,
                    name=meal_name,
                    description=meal_description,
                    base_price=0,
                    display_order=999,
                    is_template=True,
                )
            )

    def delete_invitation(self, invitation_id: int) -> None:
        invitation = self.repo.get_by_id(invitation_id)
        if not invitation:
            raise NotFoundException("Invitation not found")
        self.repo.delete(invitation)
        logger.info("Invitation id=%s deleted", invitation_id)
