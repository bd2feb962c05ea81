from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field


class MealCreate(BaseModel):
    """Schema for creating a meal"""

    category_id: int
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    base_price: Decimal = Field(..., ge=0, decimal_places=2)
    compare_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    is_available: bool = True
    show_in_menu: bool = True
    is_featured: bool = False
    display_order: int = Field(default=0, ge=0)


class MealUpdate(BaseModel):
    """Schema for updating a meal"""

    category_id: int | None = None
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)
    base_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    compare_price: Decimal | None = Field(None, ge=0, decimal_places=2)
    show_in_menu: bool | None = None
    is_featured: bool | None = None
    display_order: int | None = Field(None, ge=0)


class MealAvailabilityUpdate(BaseModel):
    is_available: bool


class MealPosition(BaseModel):
    id: int
    display_order: int = Field(..., ge=0)


class MealReorderRequest(BaseModel):
    items: list[MealPosition] = Field(..., max_length=1000)


class MealResponse(BaseModel):
    """Schema for meal response"""

    id: int
    tenant_id: int
    category_id: int
    name: str
    description: str
    base_price: Decimal
    compare_price: Decimal | None
    is_available: bool
    show_in_menu: bool
    is_featured: bool
    display_order: int
    is_template: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MealListResponse(BaseModel):
    meals: list[MealResponse]
    total: int


class ReorderResponse(BaseModel):
    updated: int
