from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.permissions import FeatureKey
from app.database import get_db
from app.dependencies import require_access, require_role
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.services.system_message_service import SystemMessageService
from app.schemas.system_message_schemas import (
    SystemMessageCreate,
    SystemMessageResponse,
    SystemMessageListResponse,
)

router = APIRouter()

can_manage = require_access(UserRole.ADMIN, FeatureKey.MANAGE_TEXTS, require_active=True)


@router.get("", response_model=SystemMessageListResponse)
async def list_system_messages(
    identity: SessionIdentity = Depends(require_role(UserRole.VIEWER)),
    db: Session = Depends(get_db),
):
    service = SystemMessageService(db, identity)
    messages = service.list_messages()
    return SystemMessageListResponse(messages=messages, total=len(messages))


@router.post("", response_model=SystemMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_system_message(
    data: SystemMessageCreate,
    identity: SessionIdentity = Depends(can_manage),
    db: Session = Depends(get_db),
):
    service = SystemMessageService(db, identity)
    return service.create_message(data)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_system_message(
    message_id: int,
    identity: SessionIdentity = Depends(can_manage),
    db: Session = Depends(get_db),
):
    service = SystemMessageService(db, identity)
    service.delete_message(message_id)
    return None
