"""
Test suite for cart, checkout and order endpoints.

System role: Verification of commerce HTTP API
"""

from unittest.mock import AsyncMock, patch

from bson import ObjectId

from cognition_api.boundary.db.CRUD.commerce_crud import cart_crud, order_crud


def test_checkout_with_empty_cart_is_400(client, as_student) -> None:
    with patch.object(cart_crud, "list_for_user", AsyncMock(return_value=[])):
        response = client.post("/checkout", json={"paymentMethod": "card"})

    assert response.status_code == 400
    assert response.json() == {"error": "Cart is empty"}


def test_checkout_places_order(client, as_student) -> None:
    # Arrange
    order_oid = ObjectId()
    cart = [{"_id": ObjectId(), "productId": "CB-101", "title": "Intro", "price": 99.5, "quantity": 2}]

    # Act
    with patch.object(cart_crud, "list_for_user", AsyncMock(return_value=cart)), \
         patch.object(cart_crud, "clear", AsyncMock(return_value=1)), \
         patch.object(order_crud, "create", AsyncMock(side_effect=lambda db, doc: {**doc, "_id": order_oid})):
        response = client.post("/checkout", json={})

    # Assert
    assert response.status_code == 201
    body = response.json()
    assert body["orderId"] == str(order_oid)
    assert body["order"]["totalAmount"] == 199.0
    assert body["order"]["status"] == "Confirmed"
    assert body["order"]["paymentMethod"] == "unknown"


def test_add_to_cart_coerces_quantity_and_price(client, as_student) -> None:
    create = AsyncMock(side_effect=lambda db, doc: {**doc, "_id": ObjectId()})

    with patch.object(cart_crud, "create", create):
        response = client.post("/cart", json={"title": "Intro", "price": "-5", "quantity": "0"})

    assert response.status_code == 201
    stored = create.await_args.args[1]
    assert stored["quantity"] == 1
    assert stored["price"] == 0.0
    assert stored["uid"] == as_student.uid


def test_invalid_cart_item_id_is_400(client, as_student) -> None:
    response = client.delete("/cart/not-an-object-id")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid cart item ID format"}


def test_user_orders_are_scoped_to_caller(client, as_student) -> None:
    with patch.object(order_crud, "list_for_user", AsyncMock(return_value=[])) as list_for_user:
        response = client.get("/orders/user")

    assert response.status_code == 200
    assert list_for_user.await_args.args[1] == as_student.uid
