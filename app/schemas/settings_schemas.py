from datetime import datetime
from pydantic import BaseModel, Field

from app.models.subscription import SubscriptionPlan, SubscriptionStatus


class RestaurantSettingsResponse(BaseModel):
    """Restaurant profile shown on the settings page"""

    id: int
    slug: str
    name: str
    direction: str
    phone: str
    location: str | None
    description: str | None
    image: str | None
    subscription_plan: SubscriptionPlan
    subscription_status: SubscriptionStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RestaurantSettingsUpdate(BaseModel):
    """Profile fields an admin may edit. Slug, plan and status are not editable here."""

    name: str | None = Field(None, min_length=1, max_length=100)
    direction: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, min_length=1, max_length=15)
    location: str | None = Field(None, max_length=500)
    description: str | None = Field(None, max_length=2000)
    image: str | None = Field(None, max_length=500)
