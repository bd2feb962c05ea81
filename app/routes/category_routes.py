from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.permissions import FeatureKey
from app.database import get_db
from app.dependencies import require_access, require_role
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.services.category_service import CategoryService
from app.schemas.category_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryReorderRequest,
    CategoryResponse,
    CategoryListResponse,
)

router = APIRouter()

can_edit = require_access(UserRole.STAFF, FeatureKey.MANAGE_CATEGORIES, require_active=True)
can_delete = require_access(UserRole.ADMIN, FeatureKey.MANAGE_CATEGORIES, require_active=True)


@router.get("", response_model=CategoryListResponse)
async def list_categories(
    include_inactive: bool = False,
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    """List categories of the session's restaurant in menu order"""
    service = CategoryService(db, identity)
    categories = service.list_categories(include_inactive=include_inactive)
    return CategoryListResponse(categories=categories, total=len(categories))


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    service = CategoryService(db, identity)
    return service.create_category(data)


@router.put("/reorder", response_model=CategoryListResponse)
async def reorder_categories(
    data: CategoryReorderRequest,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    """Bulk-set menu order from the list position of each category id"""
    service = CategoryService(db, identity)
    categories = service.reorder_categories(data.category_ids)
    return CategoryListResponse(categories=categories, total=len(categories))


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    service = CategoryService(db, identity)
    return service.get_category(category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    identity: SessionIdentity = Depends(can_edit),
    db: Session = Depends(get_db),
):
    service = CategoryService(db, identity)
    return service.update_category(category_id, data)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    identity: SessionIdentity = Depends(can_delete),
    db: Session = Depends(get_db),
):
    """Deactivate a category (soft delete)"""
    service = CategoryService(db, identity)
    service.delete_category(category_id)
    return None
