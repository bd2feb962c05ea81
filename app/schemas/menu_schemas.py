from decimal import Decimal
from pydantic import BaseModel

from app.models.system_message import MessageType


class MenuMeal(BaseModel):
    id: int
    name: str
    description: str
    base_price: Decimal
    compare_price: Decimal | None
    is_available: bool
    is_featured: bool

    model_config = {"from_attributes": True}


class MenuCategory(BaseModel):
    id: int
    name: str
    slug: str
    description: str
    meals: list[MenuMeal]


class MenuMessage(BaseModel):
    placement: str
    message_type: MessageType
    content: str

    model_config = {"from_attributes": True}


class MenuRestaurant(BaseModel):
    slug: str
    name: str
    direction: str
    phone: str
    location: str | None
    description: str | None
    image: str | None

    model_config = {"from_attributes": True}


class PublicMenuResponse(BaseModel):
    """Everything the public menu page renders for one restaurant"""

    restaurant: MenuRestaurant
    service_suspended: bool = False
    categories: list[MenuCategory]
    messages: list[MenuMessage]
