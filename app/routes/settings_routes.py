from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.permissions import FeatureKey
from app.database import get_db
from app.dependencies import require_access, require_role
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.services.settings_service import SettingsService
from app.schemas.settings_schemas import RestaurantSettingsResponse, RestaurantSettingsUpdate

router = APIRouter()


@router.get("", response_model=RestaurantSettingsResponse)
async def get_settings(
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    """Profile of the session's restaurant"""
    service = SettingsService(db, identity)
    return service.get_settings()


@router.patch("", response_model=RestaurantSettingsResponse)
async def update_settings(
    data: RestaurantSettingsUpdate,
    identity: SessionIdentity = Depends(
        require_access(UserRole.ADMIN, FeatureKey.MANAGE_PROFILE, require_active=True)
    ),
    db: Session = Depends(get_db),
):
    service = SettingsService(db, identity)
    return service.update_settings(data)
