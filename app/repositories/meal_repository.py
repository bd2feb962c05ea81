from app.models.meal import Meal
from app.repositories.tenant_scoped import TenantScopedRepository


class MealRepository(TenantScopedRepository[Meal]):
    """Repository for Meal model operations within one tenant"""

    model = Meal

    def get_filtered(self, category_id: int | None = None, available_only: bool = False) -> list[Meal]:
        query = self._query()
        if category_id is not None:
            query = query.filter(Meal.category_id == category_id)
        if available_only:
            query = query.filter(Meal.is_available.is_(True))
        return query.order_by(Meal.display_order, Meal.id).all()

    def get_menu_items(self, category_ids: list[int]) -> list[Meal]:
        """Meals shown on the public menu for the given categories"""
        if not category_ids:
            return []
        return (
            self._query()
            .filter(Meal.category_id.in_(category_ids), Meal.show_in_menu.is_(True))
            .order_by(Meal.display_order, Meal.id)
            .all()
        )
