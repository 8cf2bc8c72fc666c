"""
Order intake, status lifecycle and order queries.
"""

from typing import List, Optional, Tuple
import logging
import math
import re
import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.enums import (
    CatalogKind,
    MealType,
    OrderStatus,
    MEAL_TYPE_VALUES,
    ORDER_STATUS_VALUES,
)
from domain.models import MAX_INTEGER, MAX_MONEY, Order, OrderItem
from domain.schemas.order_schemas import (
    OrderCreate,
    OrderLineRequest,
    OrderListResponse,
    OrderResponse,
)
from repositories import OrderRepository, UserRepository
from services.catalog_service import CatalogService
from app.config import settings
from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)

logger = logging.getLogger("canteen.orders")

TOKEN_PATTERN = re.compile(r"#[0-9]{5}")
TOKEN_TAKEN_MESSAGE = "Token already exists. Please generate a new token."


def is_valid_token(token) -> bool:
    return isinstance(token, str) and TOKEN_PATTERN.fullmatch(token) is not None


def _as_quantity(value) -> Optional[int]:
    """Whole number >= 1, or None. JSON numbers like 2.0 are accepted."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and 1 <= value <= MAX_INTEGER:
        return value
    return None


def _parse_status(value: Optional[str]) -> Optional[OrderStatus]:
    if value is None or value == "":
        return None
    if value not in ORDER_STATUS_VALUES:
        raise ServiceValidationError("Invalid status")
    return OrderStatus(value)


def _parse_meal_type(value: Optional[str]) -> Optional[MealType]:
    if value is None or value == "":
        return None
    if value not in MEAL_TYPE_VALUES:
        raise ServiceValidationError("Invalid meal type")
    return MealType(value)


def _paginate(orders: List[Order], total: int, page: int, limit: int) -> OrderListResponse:
    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        total_pages=math.ceil(total / limit),
        current_page=page,
        total_orders=total,
    )


class OrderService:
    @staticmethod
    def validate_submission(data: OrderCreate) -> None:
        """Request-level checks that need no database access."""
        if not data.items:
            raise ServiceValidationError("Items are required")
        if not data.time_slot or not data.time_slot.strip():
            raise ServiceValidationError("Time slot is required")
        if data.total_amount is None or not math.isfinite(data.total_amount) or data.total_amount <= 0:
            raise ServiceValidationError("Valid total amount is required")
        if not is_valid_token(data.token):
            raise ServiceValidationError("Valid token is required")

    @staticmethod
    def price_lines(
        db: Session, lines: List[OrderLineRequest]
    ) -> Tuple[List[OrderItem], Decimal]:
        """
        Re-price cart lines against the catalog.

        Returns snapshot line records (current catalog name and price) and
        the authoritative total. Client-supplied names and prices are used
        only in error messages.

        Raises:
            NotFoundError: a line references an unknown food item
            ConflictError: a line references an unavailable food item
            ServiceValidationError: bad meal type or quantity, or a total too
                large to store
        """
        snapshots: List[OrderItem] = []
        total = Decimal("0")
        for position, line in enumerate(lines):
            label = line.name or line.food_item_id
            food = CatalogService.find_by_id(db, CatalogKind.FOOD_ITEM, line.food_item_id)
            if food is None:
                raise NotFoundError(f"Food item {label} not found")
            if not food.available:
                raise ConflictError(f"Food item {label} is not available")
            if line.meal_type not in MEAL_TYPE_VALUES:
                raise ServiceValidationError("Invalid meal type")
            quantity = _as_quantity(line.quantity)
            if quantity is None:
                raise ServiceValidationError("Valid quantity is required")

            price = Decimal(str(food.price))
            total += price * quantity
            snapshots.append(
                OrderItem(
                    position=position,
                    food_item_id=food.id,
                    name=food.name,
                    price=price,
                    quantity=quantity,
                    meal_type=MealType(line.meal_type),
                )
            )
        if total > MAX_MONEY:
            raise ServiceValidationError("Order total is too large")
        return snapshots, total

    @staticmethod
    def place_order(db: Session, user_id: uuid.UUID, data: OrderCreate) -> Order:
        """
        Validate a cart submission and persist it as a pending order.

        Rules are applied in a fixed order and the first failure is reported;
        nothing is written unless every rule passes. The stored total is the
        catalog-derived one, never the submitted figure.

        Raises:
            ServiceValidationError: missing/malformed fields
            NotFoundError: unknown account or food item
            ConflictError: unavailable item, amount mismatch, token reuse
        """
        OrderService.validate_submission(data)

        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        snapshots, computed_total = OrderService.price_lines(db, data.items)

        submitted = Decimal(str(data.total_amount))
        if abs(computed_total - submitted) > Decimal(str(settings.amount_tolerance)):
            logger.warning(
                "order_amount_mismatch user_id=%s submitted=%s computed=%s",
                user_id,
                submitted,
                computed_total,
            )
            raise ConflictError(
                "Total amount doesn't match item prices",
                details={"computed": float(computed_total), "submitted": float(submitted)},
            )

        repo = OrderRepository(db)
        if repo.token_exists(data.token):
            logger.warning("order_token_taken user_id=%s token=%s", user_id, data.token)
            raise ConflictError(TOKEN_TAKEN_MESSAGE)

        order = Order(
            user_id=user.user_id,
            user_index_no=user.index_no,
            items=snapshots,
            time_slot=data.time_slot.strip(),
            total_amount=computed_total,
            token=data.token,
            status=OrderStatus.PENDING,
            order_date=datetime.now(),
            notes=(data.notes or "").strip(),
        )
        try:
            order = repo.create(order)
        except IntegrityError:
            # The unique index on token is the real guard; the pre-check above
            # only short-circuits the common case.
            db.rollback()
            logger.warning("order_token_race user_id=%s token=%s", user_id, data.token)
            raise ConflictError(TOKEN_TAKEN_MESSAGE)

        logger.info(
            "order_placed order_id=%s user_id=%s token=%s lines=%d total=%s",
            order.id,
            user_id,
            order.token,
            len(snapshots),
            order.total_amount,
        )
        return order

    @staticmethod
    def set_status(
        db: Session, order_id: uuid.UUID, new_status: Optional[str], actor_id: uuid.UUID
    ) -> Order:
        """
        Move an order to ``new_status``.

        Owners without admin rights may only cancel a pending order. Admins
        may set any recognised status from any status.
        """
        if new_status not in ORDER_STATUS_VALUES:
            raise ServiceValidationError("Invalid status")
        target = OrderStatus(new_status)

        repo = OrderRepository(db)
        order = repo.get_by_id(order_id)
        if not order:
            raise NotFoundError("Order not found")

        actor = UserRepository(db).get_by_id(actor_id)
        if not actor:
            raise UnauthorizedError("User not found")

        if order.user_id != actor.user_id and not actor.is_admin:
            raise ForbiddenError("Access denied")

        if not actor.is_admin and (
            order.status != OrderStatus.PENDING or target != OrderStatus.CANCELLED
        ):
            logger.warning(
                "order_status_denied order_id=%s actor=%s from=%s to=%s",
                order.id,
                actor.user_id,
                order.status.value,
                target.value,
            )
            raise ForbiddenError("You can only cancel pending orders")

        previous = order.status
        order.status = target
        order = repo.update(order)
        logger.info(
            "order_status_changed order_id=%s from=%s to=%s by=%s",
            order.id,
            previous.value,
            target.value,
            actor.user_id,
        )
        return order

    @staticmethod
    def list_my_orders(
        db: Session,
        user_id: uuid.UUID,
        page: int,
        limit: int,
        status: Optional[str] = None,
    ) -> OrderListResponse:
        orders, total = OrderRepository(db).search(
            skip=(page - 1) * limit,
            limit=limit,
            user_id=user_id,
            status=_parse_status(status),
        )
        return _paginate(orders, total, page, limit)

    @staticmethod
    def get_my_order_by_token(db: Session, user_id: uuid.UUID, token: str) -> Order:
        """Look up one of the caller's own orders by pickup token"""
        if not is_valid_token(token):
            raise ServiceValidationError("Invalid token format")
        order = OrderRepository(db).get_by_token_for_user(token, user_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def list_all_orders(
        db: Session,
        page: int,
        limit: int,
        status: Optional[str] = None,
        meal_type: Optional[str] = None,
        order_day: Optional[str] = None,
        search: Optional[str] = None,
    ) -> OrderListResponse:
        """Admin listing across all accounts"""
        day_start = None
        if order_day:
            try:
                day_start = datetime.combine(date.fromisoformat(order_day), datetime.min.time())
            except ValueError:
                raise ServiceValidationError("Invalid date, expected YYYY-MM-DD")

        orders, total = OrderRepository(db).search(
            skip=(page - 1) * limit,
            limit=limit,
            status=_parse_status(status),
            meal_type=_parse_meal_type(meal_type),
            day_start=day_start,
            search=search.strip() if search else None,
        )
        return _paginate(orders, total, page, limit)
