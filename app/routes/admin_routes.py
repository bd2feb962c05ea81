from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_superadmin
from app.models.invitation import InvitationStatus
from app.models.session_identity import SessionIdentity
from app.services.admin_service import AdminService
from app.services.invitation_service import InvitationService
from app.schemas.admin_schemas import (
    CustomerDetailResponse,
    CustomerListResponse,
    CustomerUserResponse,
    PlatformStatsResponse,
    SubscriptionUpdate,
    UserAdminUpdate,
)
from app.schemas.invitation_schemas import (
    InvitationCreate,
    InvitationListResponse,
    InvitationResponse,
)
from app.schemas.settings_schemas import RestaurantSettingsResponse

router = APIRouter()


@router.get("/invitations", response_model=InvitationListResponse)
async def list_invitations(
    status_filter: InvitationStatus | None = Query(None, alias="status"),
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    service = InvitationService(db)
    invitations = service.list_invitations(status=status_filter)
    return InvitationListResponse(invitations=invitations, total=len(invitations))


@router.post("/invitations", response_model=InvitationResponse, status_code=status.HTTP_201_CREATED)
async def create_invitation(
    data: InvitationCreate,
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    """
    Invite a new restaurant.

    - **Requires SUPERADMIN**
    - Conflict if the email already has a pending, unexpired invitation
    """
    service = InvitationService(db)
    return service.create_invitation(data, identity)


@router.delete("/invitations/{invitation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invitation(
    invitation_id: int,
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    service = InvitationService(db)
    service.delete_invitation(invitation_id)
    return None


@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(
    q: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    """Restaurants sorted by name, with active user counts"""
    service = AdminService(db)
    return service.list_customers(q=q, page=page, limit=limit)


@router.get("/customers/{tenant_id}", response_model=CustomerDetailResponse)
async def get_customer(
    tenant_id: int,
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    service = AdminService(db)
    return service.get_customer(tenant_id)


@router.patch("/customers/{tenant_id}", response_model=RestaurantSettingsResponse)
async def update_customer_subscription(
    tenant_id: int,
    data: SubscriptionUpdate,
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    """
    Change plan and/or subscription status.

    Users of the restaurant see the change after their next login.
    """
    service = AdminService(db)
    return service.update_subscription(tenant_id, data)


@router.patch("/users/{user_id}", response_model=CustomerUserResponse)
async def update_user(
    user_id: int,
    data: UserAdminUpdate,
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    service = AdminService(db)
    return service.update_user(user_id, data)


@router.get("/stats", response_model=PlatformStatsResponse)
async def get_stats(
    identity: SessionIdentity = Depends(require_superadmin),
    db: Session = Depends(get_db),
):
    service = AdminService(db)
    return service.get_stats()
