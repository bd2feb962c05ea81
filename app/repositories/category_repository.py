from app.models.category import Category
from app.repositories.tenant_scoped import TenantScopedRepository


class CategoryRepository(TenantScopedRepository[Category]):
    """Repository for Category model operations within one tenant"""

    model = Category

    def get_active(self) -> list[Category]:
        """Active categories in menu order"""
        return (
            self._query()
            .filter(Category.is_active.is_(True))
            .order_by(Category.sort_order, Category.id)
            .all()
        )

    def get_by_slug(self, slug: str) -> Category | None:
        return self._query().filter(Category.slug == slug).first()

    def next_code(self) -> int:
        """Highest category code in use plus one"""
        codes = [code for (code,) in self._query().with_entities(Category.code).all()]
        return max(codes, default=0) + 1
