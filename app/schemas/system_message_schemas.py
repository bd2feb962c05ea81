from datetime import datetime
from pydantic import BaseModel, Field

from app.models.system_message import MessageType


class SystemMessageCreate(BaseModel):
    placement: str = Field(..., min_length=1, max_length=100)
    message_type: MessageType = MessageType.INFO
    content: str = Field(..., min_length=1, max_length=1000)
    is_active: bool = True
    sort_order: int = Field(default=0, ge=0)


class SystemMessageResponse(BaseModel):
    id: int
    tenant_id: int
    placement: str
    message_type: MessageType
    content: str
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SystemMessageListResponse(BaseModel):
    messages: list[SystemMessageResponse]
    total: int
