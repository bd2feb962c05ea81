from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.invitation_service import InvitationService
from app.schemas.invitation_schemas import (
    InvitationRegisterRequest,
    InvitationRegisterResponse,
    InvitationValidationResponse,
)

router = APIRouter()


@router.get("/validate/{code}", response_model=InvitationValidationResponse)
async def validate_invitation(code: str, db: Session = Depends(get_db)):
    """
    Check an invitation code before showing the onboarding form.

    - 404 if the code is unknown
    - 410 if it was used or has expired
    """
    service = InvitationService(db)
    invitation = service.validate_code(code)
    return InvitationValidationResponse(
        email=invitation.email,
        restaurant_name=invitation.tenant_name,
        expires_at=invitation.expires_at,
        notes=invitation.notes,
    )


@router.post("/register", response_model=InvitationRegisterResponse, status_code=status.HTTP_201_CREATED)
async def register_with_invitation(data: InvitationRegisterRequest, db: Session = Depends(get_db)):
    """
    Redeem an invitation.

    Creates the restaurant (standard plan), its admin user and a starter
    menu, then marks the invitation used.
    """
    service = InvitationService(db)
    tenant, user = service.register(data)
    return InvitationRegisterResponse(
        tenant_id=tenant.id,
        slug=tenant.slug,
        name=tenant.name,
        user_id=user.id,
        redirect_to=f"/onboarding/welcome?restaurantId={tenant.id}",
    )
