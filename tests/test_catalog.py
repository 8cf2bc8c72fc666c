"""
Tests for the food item and curry catalogs.

This test suite covers:
- Creating entries with sequential display ids (FD001, CUR001, ...)
- Name and price validation, case-insensitive duplicate names
- Availability filtering and toggling
- Updates and hard deletes
- Admin-only writes, public reads
"""

import uuid

import pytest

from test_fixtures import auth_headers, make_curry, make_food_item
from domain.enums import CatalogKind
from repositories import CurryRepository, FoodItemRepository
from services.catalog_service import CatalogService, parse_entry_id
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError


# =============================================================================
# SERVICE
# =============================================================================


def test_create_food_item_defaults(db_session, admin_user):
    item = CatalogService.create_entry(
        db_session, CatalogKind.FOOD_ITEM, admin_user, "  Rice and Curry ", 350
    )

    assert item.name == "Rice and Curry"
    assert item.available is True
    assert item.display_id == "FD001"
    assert float(item.price) == 350.0
    assert item.created_by == admin_user.user_id


def test_display_ids_are_sequential(db_session, admin_user):
    codes = [
        CatalogService.create_entry(db_session, CatalogKind.CURRY, admin_user, name).display_id
        for name in ("Dhal Curry", "Chicken Curry", "Fish Curry")
    ]
    assert codes == ["CUR001", "CUR002", "CUR003"]


def test_display_id_skips_codes_in_use_after_delete(db_session, admin_user):
    first = CatalogService.create_entry(db_session, CatalogKind.FOOD_ITEM, admin_user, "A", 100)
    CatalogService.create_entry(db_session, CatalogKind.FOOD_ITEM, admin_user, "B", 100)
    CatalogService.delete_entry(db_session, CatalogKind.FOOD_ITEM, first.id, admin_user)

    # one entry left (FD002), so the count-derived code FD002 is taken
    third = CatalogService.create_entry(db_session, CatalogKind.FOOD_ITEM, admin_user, "C", 100)
    assert third.display_id == "FD003"


@pytest.mark.parametrize("name", [None, "", "   "])
def test_name_required(db_session, admin_user, name):
    with pytest.raises(ServiceValidationError, match="Name is required"):
        CatalogService.create_entry(db_session, CatalogKind.CURRY, admin_user, name)


@pytest.mark.parametrize(
    "price, message",
    [
        (None, "Price is required"),
        (0, "greater than 0"),
        (-5, "greater than 0"),
        (float("nan"), "must be a number"),
        (float("inf"), "too large"),
        (100_000_000, "too large"),
    ],
)
def test_food_item_price_rules(db_session, admin_user, price, message):
    with pytest.raises(ServiceValidationError, match=message):
        CatalogService.create_entry(db_session, CatalogKind.FOOD_ITEM, admin_user, "Kottu", price)


def test_largest_storable_price_accepted(db_session, admin_user):
    item = CatalogService.create_entry(
        db_session, CatalogKind.FOOD_ITEM, admin_user, "Banquet", 99999999.99
    )
    assert str(item.price) == "99999999.99"


def test_curry_ignores_price(db_session, admin_user):
    curry = CatalogService.create_entry(db_session, CatalogKind.CURRY, admin_user, "Dhal Curry", None)
    assert not hasattr(curry, "price")


def test_duplicate_name_conflicts_ignoring_case(db_session, admin_user):
    make_food_item(db_session, "Rice and Curry", 350)
    with pytest.raises(ConflictError):
        CatalogService.create_entry(
            db_session, CatalogKind.FOOD_ITEM, admin_user, "RICE AND CURRY", 300
        )


def test_same_name_allowed_across_catalogs(db_session, admin_user):
    make_food_item(db_session, "Kiribath", 150)
    curry = CatalogService.create_entry(db_session, CatalogKind.CURRY, admin_user, "Kiribath")
    assert curry.display_id == "CUR001"


def test_update_entry(db_session, admin_user):
    item = make_food_item(db_session, "Rice and Curry", 350)
    updated = CatalogService.update_entry(
        db_session, CatalogKind.FOOD_ITEM, item.id, admin_user, price=375, available=False
    )
    assert float(updated.price) == 375.0
    assert updated.available is False
    assert updated.name == "Rice and Curry"


def test_update_to_existing_name_conflicts(db_session, admin_user):
    make_curry(db_session, "Dhal Curry")
    other = make_curry(db_session, "Fish Curry")
    with pytest.raises(ConflictError):
        CatalogService.update_entry(
            db_session, CatalogKind.CURRY, other.id, admin_user, name="dhal curry"
        )


def test_update_keeping_own_name(db_session, admin_user):
    curry = make_curry(db_session, "Dhal Curry")
    updated = CatalogService.update_entry(
        db_session, CatalogKind.CURRY, curry.id, admin_user, name="DHAL CURRY"
    )
    assert updated.name == "DHAL CURRY"


def test_toggle_availability(db_session, admin_user):
    curry = make_curry(db_session, "Dhal Curry")
    assert CatalogService.toggle_availability(
        db_session, CatalogKind.CURRY, curry.id, admin_user
    ).available is False
    assert CatalogService.toggle_availability(
        db_session, CatalogKind.CURRY, curry.id, admin_user
    ).available is True


def test_delete_missing_entry(db_session, admin_user):
    with pytest.raises(NotFoundError, match="Curry not found"):
        CatalogService.delete_entry(db_session, CatalogKind.CURRY, uuid.uuid4(), admin_user)


def test_find_available_filters(db_session):
    make_food_item(db_session, "Rice and Curry", 350)
    make_food_item(db_session, "Fried Rice", 450, available=False)

    names = [f.name for f in CatalogService.find_available(db_session, CatalogKind.FOOD_ITEM)]
    assert names == ["Rice and Curry"]


def test_find_by_id_tolerates_malformed_ids(db_session):
    assert CatalogService.find_by_id(db_session, CatalogKind.FOOD_ITEM, "nope") is None
    assert CatalogService.find_by_id(db_session, CatalogKind.FOOD_ITEM, None) is None
    assert parse_entry_id("nope") is None


def test_filter_available_ids_keeps_submitted_order(db_session):
    a = make_curry(db_session, "Dhal Curry")
    b = make_curry(db_session, "Fish Curry")
    c = make_curry(db_session, "Soya Curry", available=False)

    kept = CatalogService.filter_available_ids(
        db_session, CatalogKind.CURRY, [str(b.id), str(c.id), str(a.id), str(b.id)]
    )
    assert kept == [str(b.id), str(a.id)]


# =============================================================================
# HTTP
# =============================================================================


def test_create_then_list_available(client, admin_user):
    """Scenario: a new food item shows up in the available listing"""
    response = client.post(
        "/api/food-items",
        json={"name": "Rice and Curry", "price": 350},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Food item created successfully"
    created = body["foodItem"]
    assert created["available"] is True
    assert created["displayId"] == "FD001"

    listing = client.get("/api/food-items", params={"available": "true"})
    assert listing.status_code == 200
    assert [f["id"] for f in listing.json()] == [created["id"]]


def test_food_item_listing_is_bare_array(client, db_session):
    make_food_item(db_session, "Rice and Curry", 350)
    make_food_item(db_session, "Fried Rice", 450, available=False)

    everything = client.get("/api/food-items").json()
    unavailable = client.get("/api/food-items", params={"available": "false"}).json()

    assert isinstance(everything, list) and len(everything) == 2
    assert [f["name"] for f in unavailable] == ["Fried Rice"]


def test_curry_listing_is_wrapped(client, db_session):
    make_curry(db_session, "Dhal Curry")

    body = client.get("/api/curries").json()
    assert list(body) == ["curries"]
    assert body["curries"][0]["displayId"] == "CUR001"


def test_get_single_entry(client, db_session):
    item = make_food_item(db_session, "Rice and Curry", 350)

    assert client.get(f"/api/food-items/{item.id}").json()["name"] == "Rice and Curry"
    missing = client.get(f"/api/food-items/{uuid.uuid4()}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Food item not found"


def test_create_requires_admin(client, student):
    response = client.post(
        "/api/curries", json={"name": "Dhal Curry"}, headers=auth_headers(student)
    )
    assert response.status_code == 403


def test_create_duplicate_endpoint(client, db_session, admin_user):
    make_curry(db_session, "Dhal Curry")
    response = client.post(
        "/api/curries", json={"name": "dhal curry"}, headers=auth_headers(admin_user)
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CONFLICT"


def test_create_invalid_price_endpoint(client, admin_user):
    response = client.post(
        "/api/food-items", json={"name": "Kottu", "price": 0}, headers=auth_headers(admin_user)
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT"


def test_create_oversized_price_endpoint(client, db_session, admin_user):
    """A price wider than the money column is a 400 and nothing is stored"""
    response = client.post(
        "/api/food-items",
        json={"name": "Kottu", "price": 1e12},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Price is too large"
    assert FoodItemRepository(db_session).list_entries() == []


def test_toggle_endpoint(client, db_session, admin_user):
    curry = make_curry(db_session, "Dhal Curry")

    response = client.patch(
        f"/api/curries/{curry.id}/toggle-availability", headers=auth_headers(admin_user)
    )
    assert response.status_code == 200
    assert response.json()["curry"]["available"] is False
    assert response.json()["message"] == "Curry marked as unavailable"


def test_update_endpoint(client, db_session, admin_user):
    item = make_food_item(db_session, "Rice and Curry", 350)
    response = client.put(
        f"/api/food-items/{item.id}",
        json={"price": 400},
        headers=auth_headers(admin_user),
    )
    assert response.status_code == 200
    assert response.json()["foodItem"]["price"] == 400


def test_delete_endpoint(client, db_session, admin_user):
    item = make_food_item(db_session, "Rice and Curry", 350)

    response = client.delete(f"/api/food-items/{item.id}", headers=auth_headers(admin_user))
    assert response.status_code == 200
    assert response.json()["deletedItem"] == {"id": str(item.id), "name": "Rice and Curry"}

    db_session.expire_all()
    assert FoodItemRepository(db_session).get_by_id(item.id) is None
    assert CurryRepository(db_session).count() == 0
