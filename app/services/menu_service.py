from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.subscription import SubscriptionStatus
from app.repositories.category_repository import CategoryRepository
from app.repositories.meal_repository import MealRepository
from app.repositories.system_message_repository import SystemMessageRepository
from app.repositories.tenant_repository import TenantRepository


class MenuService:
    """Read-only public menu, looked up by tenant slug"""

    def __init__(self, db: Session):
        self.db = db
        self.tenant_repo = TenantRepository(db)

    def get_menu(self, slug: str) -> dict:
        """
        Build the public menu of a restaurant.

        Canceled restaurants keep their page but show no menu.

        Raises:
            NotFoundException: If no restaurant has this slug
        """
        tenant = self.tenant_repo.get_by_slug(slug.lower())
        if not tenant:
            raise NotFoundException("Restaurant not found")

        if tenant.subscription_status == SubscriptionStatus.CANCELED:
            return {"restaurant": tenant, "service_suspended": True, "categories": [], "messages": []}

        categories = CategoryRepository(self.db, tenant.id).get_active()
        meals = MealRepository(self.db, tenant.id).get_menu_items([c.id for c in categories])

        meals_by_category: dict[int, list] = {c.id: [] for c in categories}
        for meal in meals:
            meals_by_category[meal.category_id].append(meal)

        return {
            "restaurant": tenant,
            "service_suspended": False,
            "categories": [
                {
                    "id": category.id,
                    "name": category.name,
                    "slug": category.slug,
                    "description": category.description,
                    "meals": meals_by_category[category.id],
                }
                for category in categories
            ],
            "messages": SystemMessageRepository(self.db, tenant.id).get_ordered(active_only=True),
        }
