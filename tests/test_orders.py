"""
Tests for order intake.

Covers the checks a cart submission goes through before it becomes a
pending order:
- request field rules (items, time slot, total, token), first failure wins
- account resolution
- catalog re-pricing and snapshot lines
- amount tolerance
- token uniqueness, both the pre-check and the unique index
"""

import uuid
from unittest.mock import patch

import pytest

from test_fixtures import (
    auth_headers,
    line,
    make_food_item,
    order_create,
    order_payload,
)
from domain.enums import CatalogKind, MealType, OrderStatus
from domain.models import Order
from domain.schemas.order_schemas import OrderCreate
from repositories import OrderRepository
from services.catalog_service import CatalogService
from services.order_service import OrderService, is_valid_token
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError


EXAMPLE_ORDER_FLOW = """
Order Placement Flow
======================================

POST /api/orders   (Authorization: Bearer <token>)
{
    "items": [{"foodItemId": "<rice id>", "quantity": 2, "mealType": "lunch"}],
    "timeSlot": "12:30 PM",
    "totalAmount": 700,
    "token": "#12345"
}

Response: 201 Created
{
    "message": "Order created successfully",
    "order": {"token": "#12345", "status": "pending", "totalAmount": 700.0, ...}
}
"""


@pytest.fixture
def rice(db_session, admin_user):
    return make_food_item(db_session, "Rice and Curry", 350, created_by=admin_user.user_id)


@pytest.fixture
def string_hoppers(db_session, admin_user):
    return make_food_item(db_session, "String Hoppers", 120.5, created_by=admin_user.user_id)


def _order_count(db_session) -> int:
    db_session.expire_all()
    return db_session.query(Order).count()


# =============================================================================
# REQUEST FIELD RULES
# =============================================================================


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"items": []}, "Items are required"),
        ({"items": None}, "Items are required"),
        ({"timeSlot": "   "}, "Time slot is required"),
        ({"timeSlot": None}, "Time slot is required"),
        ({"totalAmount": 0}, "Valid total amount is required"),
        ({"totalAmount": -10}, "Valid total amount is required"),
        ({"token": "12345"}, "Valid token is required"),
        ({"token": "#1234"}, "Valid token is required"),
        ({"token": "#123456"}, "Valid token is required"),
        ({"token": None}, "Valid token is required"),
    ],
)
def test_invalid_fields_rejected(db_session, student, rice, overrides, message):
    payload = order_payload([line(rice, 2)], 700)
    payload.update(overrides)

    with pytest.raises(ServiceValidationError) as exc:
        OrderService.place_order(db_session, student.user_id, OrderCreate.model_validate(payload))

    assert exc.value.message == message
    assert _order_count(db_session) == 0


def test_first_failing_rule_wins(db_session, student):
    """Empty items and a bad token: the items rule is reported"""
    payload = order_payload([], 0, token="bad")
    with pytest.raises(ServiceValidationError, match="Items are required"):
        OrderService.place_order(db_session, student.user_id, OrderCreate.model_validate(payload))


def test_unknown_user_is_not_found(db_session, rice):
    with pytest.raises(NotFoundError, match="User not found"):
        OrderService.place_order(db_session, uuid.uuid4(), order_create([line(rice, 2)], 700))


def test_field_rules_checked_before_user(db_session, rice):
    """A malformed token is reported even when the account does not exist"""
    with pytest.raises(ServiceValidationError):
        OrderService.place_order(
            db_session, uuid.uuid4(), order_create([line(rice, 2)], 700, token="#12")
        )


def test_token_format_helper():
    assert is_valid_token("#00000")
    assert is_valid_token("#98765")
    assert not is_valid_token("#9876a")
    assert not is_valid_token(" #12345")
    assert not is_valid_token(None)


# =============================================================================
# LINE ITEM RULES
# =============================================================================


def test_unknown_food_item_is_not_found(db_session, student, rice):
    lines = [line(rice, 1), {"foodItemId": str(uuid.uuid4()), "name": "Ghost", "quantity": 1, "mealType": "lunch"}]
    with pytest.raises(NotFoundError, match="Ghost"):
        OrderService.place_order(db_session, student.user_id, order_create(lines, 350))
    assert _order_count(db_session) == 0


def test_malformed_food_item_id_is_not_found(db_session, student):
    lines = [{"foodItemId": "not-a-uuid", "quantity": 1, "mealType": "lunch"}]
    with pytest.raises(NotFoundError):
        OrderService.place_order(db_session, student.user_id, order_create(lines, 100))


def test_unavailable_food_item_conflicts(db_session, student, admin_user):
    kottu = make_food_item(db_session, "Chicken Kottu", 600, available=False)
    with pytest.raises(ConflictError, match="not available"):
        OrderService.place_order(db_session, student.user_id, order_create([line(kottu, 1)], 600))
    assert _order_count(db_session) == 0


@pytest.mark.parametrize("meal_type", ["brunch", "", None, "LUNCH"])
def test_invalid_meal_type(db_session, student, rice, meal_type):
    with pytest.raises(ServiceValidationError, match="Invalid meal type"):
        OrderService.place_order(
            db_session, student.user_id, order_create([line(rice, 1, meal_type=meal_type)], 350)
        )


@pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", None, True, 2**31, 1e300])
def test_invalid_quantity(db_session, student, rice, quantity):
    with pytest.raises(ServiceValidationError, match="Valid quantity is required"):
        OrderService.place_order(
            db_session, student.user_id, order_create([line(rice, quantity)], 350)
        )


def test_integral_float_quantity_accepted(db_session, student, rice):
    order = OrderService.place_order(
        db_session, student.user_id, order_create([line(rice, 2.0)], 700)
    )
    assert order.items[0].quantity == 2


# =============================================================================
# PRICING
# =============================================================================


def test_total_is_recomputed_from_catalog(db_session, student, rice, string_hoppers):
    lines = [line(rice, 2, "lunch"), line(string_hoppers, 3, "dinner")]
    # 2 * 350 + 3 * 120.50 = 1061.50; submit a figure inside the tolerance
    order = OrderService.place_order(
        db_session, student.user_id, order_create(lines, 1061.495)
    )

    assert float(order.total_amount) == pytest.approx(1061.50)
    assert order.status == OrderStatus.PENDING
    assert order.user_index_no == student.index_no
    assert [i.meal_type for i in order.items] == [MealType.LUNCH, MealType.DINNER]


def test_client_line_prices_are_ignored(db_session, student, rice):
    lines = [line(rice, 1, price=1.0, name="Cheap Rice")]
    order = OrderService.place_order(db_session, student.user_id, order_create(lines, 350))

    snapshot = order.items[0]
    assert snapshot.name == "Rice and Curry"
    assert float(snapshot.price) == 350.0


@pytest.mark.parametrize("submitted", [699.98, 700.02, 350, 1400])
def test_amount_mismatch_conflicts(db_session, student, rice, submitted):
    with pytest.raises(ConflictError, match="Total amount doesn't match"):
        OrderService.place_order(
            db_session, student.user_id, order_create([line(rice, 2)], submitted)
        )
    assert _order_count(db_session) == 0


def test_total_wider_than_money_column_rejected(db_session, student):
    banquet = make_food_item(db_session, "Banquet", 99999999)
    with pytest.raises(ServiceValidationError, match="Order total is too large"):
        OrderService.place_order(
            db_session, student.user_id, order_create([line(banquet, 2)], 199999998)
        )
    assert _order_count(db_session) == 0


def test_snapshot_survives_catalog_price_change(db_session, student, admin_user, rice):
    order = OrderService.place_order(
        db_session, student.user_id, order_create([line(rice, 2)], 700)
    )

    CatalogService.update_entry(
        db_session, CatalogKind.FOOD_ITEM, rice.id, admin_user, name="Rice & Curry", price=400
    )
    db_session.expire_all()
    reloaded = OrderRepository(db_session).get_by_id(order.id)

    assert reloaded.items[0].name == "Rice and Curry"
    assert float(reloaded.items[0].price) == 350.0
    assert float(reloaded.total_amount) == 700.0


def test_notes_and_time_slot_trimmed(db_session, student, rice):
    order = OrderService.place_order(
        db_session,
        student.user_id,
        order_create([line(rice, 1)], 350, time_slot="  7:00 PM ", notes="  no chilli  "),
    )
    assert order.time_slot == "7:00 PM"
    assert order.notes == "no chilli"


# =============================================================================
# TOKEN UNIQUENESS
# =============================================================================


def test_reused_token_conflicts(db_session, student, other_student, rice):
    OrderService.place_order(db_session, student.user_id, order_create([line(rice, 1)], 350))

    with pytest.raises(ConflictError, match="Token already exists"):
        OrderService.place_order(
            db_session, other_student.user_id, order_create([line(rice, 2)], 700)
        )
    assert _order_count(db_session) == 1


def test_token_race_caught_by_unique_index(db_session, student, rice):
    """When the pre-check misses a concurrent insert, the index still wins"""
    OrderService.place_order(db_session, student.user_id, order_create([line(rice, 1)], 350))

    with patch.object(OrderRepository, "token_exists", return_value=False):
        with pytest.raises(ConflictError, match="Token already exists"):
            OrderService.place_order(
                db_session, student.user_id, order_create([line(rice, 1)], 350)
            )

    assert _order_count(db_session) == 1


# =============================================================================
# HTTP
# =============================================================================


def test_place_order_endpoint(client, student, rice):
    """Scenario: two plates of rice and curry at 350 each"""
    response = client.post(
        "/api/orders",
        json=order_payload([line(rice, 2, "lunch")], 700, token="#12345"),
        headers=auth_headers(student),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Order created successfully"
    order = body["order"]
    assert order["totalAmount"] == 700
    assert order["status"] == "pending"
    assert order["token"] == "#12345"
    assert order["userIndexNo"] == student.index_no
    assert order["items"][0]["foodItemId"] == str(rice.id)
    assert order["items"][0]["mealType"] == "lunch"


def test_reused_token_endpoint(client, db_session, student, rice):
    """Scenario: the same token a second time is a 400 conflict"""
    first = client.post(
        "/api/orders",
        json=order_payload([line(rice, 2)], 700, token="#12345"),
        headers=auth_headers(student),
    )
    assert first.status_code == 201

    second = client.post(
        "/api/orders",
        json=order_payload([line(rice, 1)], 350, token="#12345"),
        headers=auth_headers(student),
    )
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "CONFLICT"
    assert _order_count(db_session) == 1


def test_place_order_requires_credentials(client, rice):
    response = client.post("/api/orders", json=order_payload([line(rice, 2)], 700))
    assert response.status_code == 401


def test_place_order_non_numeric_total(client, student, rice):
    payload = order_payload([line(rice, 2)], "seven hundred")
    response = client.post("/api/orders", json=payload, headers=auth_headers(student))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_order_response_names_customer(client, student, rice):
    response = client.post(
        "/api/orders",
        json=order_payload([line(rice, 1)], 350, token="#24680"),
        headers=auth_headers(student),
    )

    assert response.status_code == 201
    assert response.json()["order"]["user"] == {
        "name": student.name,
        "email": student.email,
        "indexNo": student.index_no,
    }
