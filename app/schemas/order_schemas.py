from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from app.models.order import OrderStatus


class OrderItemCreate(BaseModel):
    """A meal line added to an order"""

    meal_id: int
    qty: int = Field(default=1, ge=1, le=100)


class OrderCreate(BaseModel):
    table_number: str = Field(default="", max_length=20)
    items: list[OrderItemCreate] = Field(default_factory=list)


class OrderItemResponse(BaseModel):
    meal_id: int
    name: str
    unit_price: Decimal
    qty: int


class OrderResponse(BaseModel):
    """Schema for order response"""

    id: int
    tenant_id: int
    order_number: int
    status: OrderStatus
    table_number: str
    items: list[OrderItemResponse]
    created_by_user_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total: int
