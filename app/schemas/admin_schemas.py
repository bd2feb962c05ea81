from datetime import datetime
from pydantic import BaseModel, Field, model_validator

from app.models.role import UserRole
from app.models.subscription import SubscriptionPlan, SubscriptionStatus
from app.schemas.settings_schemas import RestaurantSettingsResponse


class CustomerSummary(BaseModel):
    id: int
    slug: str
    name: str
    subscription_plan: SubscriptionPlan
    subscription_status: SubscriptionStatus
    active_users: int
    created_at: datetime


class CustomerListResponse(BaseModel):
    customers: list[CustomerSummary]
    total: int
    page: int
    limit: int


class CustomerUserResponse(BaseModel):
    id: int
    full_name: str
    username: str
    email: str
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class CustomerDetailResponse(BaseModel):
    tenant: RestaurantSettingsResponse
    users: list[CustomerUserResponse]
    category_count: int
    meal_count: int
    order_count: int


class SubscriptionUpdate(BaseModel):
    """Change a customer's plan and/or subscription status"""

    subscription_plan: SubscriptionPlan | None = None
    subscription_status: SubscriptionStatus | None = None

    @model_validator(mode="after")
    def require_a_field(self):
        if self.subscription_plan is None and self.subscription_status is None:
            raise ValueError("Provide subscription_plan or subscription_status")
        return self


class UserAdminUpdate(BaseModel):
    role: UserRole | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def require_a_field(self):
        if self.role is None and self.is_active is None:
            raise ValueError("Provide role or is_active")
        return self


class PlatformStatsResponse(BaseModel):
    tenants: int
    active_users: int
    pending_invitations: int
    used_invitations: int
