import logging
import re
import unicodedata

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictException, NotFoundException, ValidationException
from app.models.category import Category
from app.models.session_identity import SessionIdentity
from app.repositories.category_repository import CategoryRepository
from app.schemas.category_schemas import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    """ASCII, lowercase, hyphen-separated form of ``value``."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")


class CategoryService:
    """Service for category business logic, scoped to the session's tenant"""

    def __init__(self, db: Session, identity: SessionIdentity):
        self.db = db
        self.identity = identity
        self.repo = CategoryRepository(db, identity.tenant_id)

    def list_categories(self, include_inactive: bool = False) -> list[Category]:
        if include_inactive:
            return sorted(self.repo.get_all(), key=lambda c: (c.sort_order, c.id))
        return self.repo.get_active()

    def get_category(self, category_id: int) -> Category:
        """
        Get category of the session's tenant.

        Raises:
            NotFoundException: If category not found or belongs to another tenant
        """
        category = self.repo.get(category_id)
        if not category:
            raise NotFoundException("Category not found")
        return category

    def create_category(self, data: CategoryCreate) -> Category:
        slug = slugify(data.slug or data.name)
        if not slug:
            raise ValidationException("Category name must contain letters or digits")
        if self.repo.get_by_slug(slug):
            raise ConflictException(f"Category '{slug}' already exists")

        category = Category(
            name=data.name,
            slug=slug,
            code=self.repo.next_code(),
            description=data.description,
            sort_order=data.sort_order,
        )
        category = self.repo.add(category)
        logger.info("Category %s created in tenant_id=%s", category.id, self.identity.tenant_id)
        return category

    def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = self.get_category(category_id)

        if data.name is not None:
            category.name = data.name
        if data.description is not None:
            category.description = data.description
        if data.sort_order is not None:
            category.sort_order = data.sort_order
        if data.is_active is not None:
            category.is_active = data.is_active

        return self.repo.update(category)

    def reorder_categories(self, category_ids: list[int]) -> list[Category]:
        """
        Set sort_order from the position of each id (1-based).

        Ids that are unknown or belong to another tenant are skipped.
        Returns the active categories in their new order.
        """
        owned = {category.id: category for category in self.repo.get_many(category_ids)}
        for position, category_id in enumerate(category_ids, start=1):
            category = owned.get(category_id)
            if category is not None:
                category.sort_order = position
        self.db.commit()
        logger.info("Reordered %s categories in tenant_id=%s", len(owned), self.identity.tenant_id)
        return self.repo.get_active()

    def delete_category(self, category_id: int) -> None:
        """Soft delete: the category disappears from listings and the menu"""
        category = self.get_category(category_id)
        category.is_active = False
        self.repo.update(category)
        logger.info("Category %s deactivated in tenant_id=%s", category.id, self.identity.tenant_id)
