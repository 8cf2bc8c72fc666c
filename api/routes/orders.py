"""Order placement, tracking and administration routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_current_user_id, get_db, require_admin
from app.config import settings
from domain.models import AppUser
from domain.schemas.order_schemas import (
    OrderCreate,
    OrderEnvelope,
    OrderListResponse,
    OrderResponse,
    StatusUpdateRequest,
)
from services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger("canteen.api.orders")


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Place an order.

    Prices are recomputed from the catalog; ``totalAmount`` must agree with
    them to within 0.01 and ``token`` must be unused.

    Example:
        POST /api/orders
        {"items": [{"foodItemId": "<id>", "quantity": 2, "mealType": "lunch"}],
         "timeSlot": "12:30 PM", "totalAmount": 700, "token": "#12345"}
    """
    order = OrderService.place_order(db, user_id, payload)
    return {
        "message": "Order created successfully",
        "order": OrderResponse.model_validate(order),
    }


@router.get("/my-orders", response_model=OrderListResponse)
def get_my_orders(
    page: int = Query(1, ge=1, le=settings.max_page),
    limit: int = Query(settings.orders_page_size, ge=1, le=100),
    status: Optional[str] = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """The caller's orders, newest first"""
    return OrderService.list_my_orders(db, user_id, page, limit, status)


@router.get("/token/{token}", response_model=OrderEnvelope, response_model_exclude_none=True)
def get_order_by_token(
    token: str,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Look up one of the caller's orders by pickup token (send ``#`` as ``%23``)"""
    order = OrderService.get_my_order_by_token(db, user_id, token)
    return {"order": OrderResponse.model_validate(order)}


@router.patch("/{order_id}/status", response_model=OrderEnvelope)
def update_order_status(
    order_id: UUID,
    payload: StatusUpdateRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Staff status changes, or cancellation of a pending order by its owner"""
    order = OrderService.set_status(db, order_id, payload.status, user_id)
    return {
        "message": "Order status updated successfully",
        "order": OrderResponse.model_validate(order),
    }


@router.get("/admin/all", response_model=OrderListResponse)
def get_all_orders(
    page: int = Query(1, ge=1, le=settings.max_page),
    limit: int = Query(settings.admin_orders_page_size, ge=1, le=100),
    status: Optional[str] = Query(None),
    meal_type: Optional[str] = Query(None, alias="mealType"),
    date: Optional[str] = Query(None, description="Order day (YYYY-MM-DD)"),
    search: Optional[str] = Query(None, description="Token or index number fragment"),
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """All orders with filters (admin only)"""
    return OrderService.list_all_orders(
        db, page, limit, status=status, meal_type=meal_type, order_day=date, search=search
    )
