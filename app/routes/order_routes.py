from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.permissions import FeatureKey
from app.database import get_db
from app.dependencies import require_access
from app.models.order import OrderStatus
from app.models.role import UserRole
from app.models.session_identity import SessionIdentity
from app.services.order_service import OrderService
from app.schemas.order_schemas import (
    OrderCreate,
    OrderItemCreate,
    OrderResponse,
    OrderListResponse,
)

router = APIRouter()

can_view = require_access(UserRole.STAFF, FeatureKey.CREATE_ORDERS)
can_write = require_access(UserRole.STAFF, FeatureKey.CREATE_ORDERS, require_active=True)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: OrderStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    identity: SessionIdentity = Depends(can_view),
    db: Session = Depends(get_db),
):
    """List orders newest first"""
    service = OrderService(db, identity)
    orders = service.list_orders(status=status_filter, limit=limit, offset=offset)
    return OrderListResponse(orders=orders, total=len(orders))


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    identity: SessionIdentity = Depends(can_write),
    db: Session = Depends(get_db),
):
    """Create an order with the next order number of the restaurant"""
    service = OrderService(db, identity)
    return service.create_order(data)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    identity: SessionIdentity = Depends(can_view),
    db: Session = Depends(get_db),
):
    service = OrderService(db, identity)
    return service.get_order(order_id)


@router.post("/{order_id}/items", response_model=OrderResponse)
async def add_order_item(
    order_id: int,
    data: OrderItemCreate,
    identity: SessionIdentity = Depends(can_write),
    db: Session = Depends(get_db),
):
    service = OrderService(db, identity)
    return service.add_item(order_id, data)
