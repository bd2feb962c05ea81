from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from app.models.invitation import InvitationStatus


class InvitationCreate(BaseModel):
    """Superadmin request to invite a new restaurant"""

    email: EmailStr
    restaurant_name: str = Field(..., min_length=1, max_length=100)
    notes: str = Field(default="", max_length=1000)


class InvitationResponse(BaseModel):
    id: int
    code: str
    email: str
    tenant_name: str
    status: InvitationStatus
    expires_at: datetime
    created_by_user_id: int | None
    used_by_user_id: int | None
    used_at: datetime | None
    notes: str
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationListResponse(BaseModel):
    invitations: list[InvitationResponse]
    total: int


class InvitationValidationResponse(BaseModel):
    """What the onboarding form needs to pre-fill itself"""

    valid: bool = True
    email: str
    restaurant_name: str
    expires_at: datetime
    notes: str


class InvitationRegisterRequest(BaseModel):
    """Redeem an invitation: creates the restaurant and its admin user"""

    code: str = Field(..., min_length=1, max_length=12)
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=50)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8, max_length=255)
    restaurant_name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=63)
    direction: str = Field(..., min_length=1, max_length=200)
    phone: str = Field(..., min_length=1, max_length=15)
    description: str | None = Field(None, max_length=2000)


class InvitationRegisterResponse(BaseModel):
    tenant_id: int
    slug: str
    name: str
    user_id: int
    redirect_to: str
