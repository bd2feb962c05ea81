from datetime import datetime
from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Schema for creating a category. The tenant always comes from the session."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(None, max_length=100)
    description: str = Field(default="", max_length=500)
    sort_order: int = Field(default=999, ge=0)


class CategoryUpdate(BaseModel):
    """Schema for updating a category"""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    sort_order: int | None = Field(None, ge=0)
    is_active: bool | None = None


class CategoryReorderRequest(BaseModel):
    """Category ids in their new menu order; positions start at 1"""

    category_ids: list[int] = Field(..., max_length=500)


class CategoryResponse(BaseModel):
    """Schema for category response"""

    id: int
    tenant_id: int
    name: str
    slug: str
    code: int
    description: str
    sort_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]
    total: int
