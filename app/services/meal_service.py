from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundException
from app.models.meal import Meal
from app.models.session_identity import SessionIdentity
from app.repositories.category_repository import CategoryRepository
from app.repositories.meal_repository import MealRepository
from app.schemas.meal_schemas import MealCreate, MealPosition, MealUpdate


class MealService:
    """Service for meal business logic, scoped to the session's tenant"""

    def __init__(self, db: Session, identity: SessionIdentity):
        self.db = db
        self.identity = identity
        self.repo = MealRepository(db, identity.tenant_id)
        self.category_repo = CategoryRepository(db, identity.tenant_id)

    def _ensure_category(self, category_id: int) -> None:
        if not self.category_repo.get(category_id):
            raise NotFoundException("Category not found")

    def list_meals(self, category_id: int | None = None, available_only: bool = False) -> list[Meal]:
        return self.repo.get_filtered(category_id=category_id, available_only=available_only)

    def get_meal(self, meal_id: int) -> Meal:
        """
        Get meal of the session's tenant.

        Raises:
            NotFoundException: If meal not found or belongs to another tenant
        """
        meal = self.repo.get(meal_id)
        if not meal:
            raise NotFoundException("Meal not found")
        return meal

    def create_meal(self, data: MealCreate) -> Meal:
        """Create meal; its category must belong to the same tenant"""
        self._ensure_category(data.category_id)
        meal = Meal(**data.model_dump())
        return self.repo.add(meal)

    def update_meal(self, meal_id: int, data: MealUpdate) -> Meal:
        meal = self.get_meal(meal_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("category_id") is not None:
            self._ensure_category(changes["category_id"])
        for field, value in changes.items():
            if value is None and field != "compare_price":
                continue
            setattr(meal, field, value)

        return self.repo.update(meal)

    def set_availability(self, meal_id: int, is_available: bool) -> Meal:
        meal = self.get_meal(meal_id)
        meal.is_available = is_available
        return self.repo.update(meal)

    def reorder_meals(self, positions: list[MealPosition]) -> int:
        """Apply display_order per meal; foreign or unknown ids are skipped. Returns rows changed."""
        owned = {meal.id: meal for meal in self.repo.get_many([p.id for p in positions])}
        for position in positions:
            meal = owned.get(position.id)
            if meal is not None:
                meal.display_order = position.display_order
        self.db.commit()
        return len(owned)

    def delete_meal(self, meal_id: int) -> None:
        meal = self.get_meal(meal_id)
        self.repo.delete(meal)
