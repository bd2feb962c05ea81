from datetime import datetime
from pydantic import BaseModel, Field

from app.models.role import UserRole
from app.models.subscription import SubscriptionPlan, SubscriptionStatus


class LoginRequest(BaseModel):
    """Credentials posted by the backoffice login form"""

    identifier: str = Field(..., min_length=1, max_length=255, description="Email or username")
    password: str = Field(..., min_length=1, max_length=255)


class SessionResponse(BaseModel):
    """Identity claims of the current session"""

    user_id: int
    tenant_id: int
    tenant_slug: str
    role: UserRole
    subscription_plan: SubscriptionPlan
    subscription_status: SubscriptionStatus
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Returned on successful login; the token is also set as a cookie"""

    access_token: str
    token_type: str = "bearer"
    session: SessionResponse


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=255)
    new_password: str = Field(..., min_length=8, max_length=255)


class MessageResponse(BaseModel):
    message: str
