from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.permissions import FeatureKey
from app.database import get_db
from app.dependencies import require_access, require_role
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.services.meal_service import MealService
from app.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealAvailabilityUpdate,
    MealReorderRequest,
    MealResponse,
    MealListResponse,
    ReorderResponse,
)

router = APIRouter()

can_edit = require_access(UserRole.STAFF, FeatureKey.MANAGE_PRODUCTS, require_active=True)
can_delete = require_access(UserRole.ADMIN, FeatureKey.MANAGE_PRODUCTS, require_active=True)


@router.get("", response_model=MealListResponse)
async def list_meals(
    category_id: int | None = None,
    available_only: bool = False,
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    """List meals, optionally filtered by category or availability"""
    service = MealService(db, identity)
    meals = service.list_meals(category_id=category_id, available_only=available_only)
    return MealListResponse(meals=meals, total=len(meals))


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
async def create_meal(
    data: MealCreate,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    service = MealService(db, identity)
    return service.create_meal(data)


@router.put("/reorder", response_model=ReorderResponse)
async def reorder_meals(
    data: MealReorderRequest,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    service = MealService(db, identity)
    return ReorderResponse(updated=service.reorder_meals(data.items))


@router.get("/{meal_id}", response_model=MealResponse)
async def get_meal(
    meal_id: int,
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    service = MealService(db, identity)
    return service.get_meal(meal_id)


@router.patch("/{meal_id}", response_model=MealResponse)
async def update_meal(
    meal_id: int,
    data: MealUpdate,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    service = MealService(db, identity)
    return service.update_meal(meal_id, data)


@router.patch("/{meal_id}/availability", response_model=MealResponse)
async def set_meal_availability(
    meal_id: int,
    data: MealAvailabilityUpdate,
    identity: SessionIdentity = Depends(require_access(UserRole.STAFF, require_active=True)),
    db: Session = Depends(get_db),
):
    """Toggle availability; allowed on every plan"""
    service = MealService(db, identity)
    return service.set_availability(meal_id, data.is_available)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    meal_id: int,
    identity: SessionIdentity = Depends(can_delete),
    db: Session = Depends(get_db),
):
    service = MealService(db, identity)
    service.delete_meal(meal_id)
    return None
