import pytest

from portfolio.catalog import CartError, CartService, get_product, list_products, newest_products, parse_quantity
from portfolio.state import StateManager


def test_list_products_filters():
    assert len(list_products()) == 8
    assert {p["category"] for p in list_products("Electronics")} == {"Electronics"}
    assert [p["id"] for p in list_products(query="KEYBOARD")] == ["4"]
    assert [p["id"] for p in list_products("Home", "lamp")] == ["3"]
    assert list_products("Fashion", "keyboard") == []


def test_newest_products_skips_excluded():
    assert [p["id"] for p in newest_products(4)] == ["8", "7", "6", "5"]
    assert [p["id"] for p in newest_products(2, exclude_ids={"8"})] == ["7", "6"]


@pytest.mark.parametrize("value, expected", [(3, 3), ("2", 2), (4.0, 4), (-1, -1)])
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.parametrize("value", ["abc", "--2", "\u00b2", 1.5, True, None, [1]])
def test_parse_quantity_rejects_junk(value):
    with pytest.raises(CartError):
        parse_quantity(value)


def test_cart_service_never_stores_non_positive_quantities():
    carts = CartService(StateManager())
    carts.add("u1", "1", 2)
    carts.update("u1", "1", 5)
    assert carts.items("u1")[0]["quantity"] == 5

    assert carts.update("u1", "1", -3) is None
    assert carts.items("u1") == []

    with pytest.raises(CartError) as exc:
        carts.add("u1", "1", 0)
    assert exc.value.status == 400
    assert all(qty > 0 for qty in carts.state.section("carts")["u1"].values())


def test_cart_service_stock_counts_existing_quantity():
    carts = CartService(StateManager())
    carts.add("u1", "5", 15)
    with pytest.raises(CartError, match="Insufficient stock"):
        carts.add("u1", "5", 6)
    with pytest.raises(CartError, match="Insufficient stock"):
        carts.update("u1", "5", 21)
    assert carts.items("u1")[0]["quantity"] == 15


def test_cart_requires_auth(app):
    client = app.test_client()
    assert client.get("/api/cart").status_code == 401
    resp = client.post("/api/cart", json={"productId": "1"})
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Unauthorized"}


def test_add_and_increment(client, auth_headers):
    resp = client.post("/api/cart", json={"productId": "1", "quantity": 2}, headers=auth_headers)
    assert resp.status_code == 200
    item = resp.get_json()
    assert item["productId"] == "1"
    assert item["quantity"] == 2
    assert item["product"]["name"] == "Wireless Bluetooth Headphones"

    resp = client.post("/api/cart", json={"productId": "1"}, headers=auth_headers)
    assert resp.get_json()["quantity"] == 3

    items = client.get("/api/cart", headers=auth_headers).get_json()
    assert len(items) == 1
    assert items[0]["quantity"] == 3


def test_add_validation(client, auth_headers):
    resp = client.post("/api/cart", json={"quantity": 1}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Product ID required"

    resp = client.post("/api/cart", json={"productId": "1", "quantity": 0}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Quantity must be a positive integer"

    resp = client.post("/api/cart", json={"productId": "1", "quantity": "lots"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Quantity must be a positive integer"

    resp = client.post("/api/cart", json={"productId": "1", "quantity": "--2"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Quantity must be a positive integer"

    resp = client.post("/api/cart", json={"productId": "999"}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Product not found"

    resp = client.post("/api/cart", json={"productId": "5", "quantity": 21}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Insufficient stock"


def test_update_and_remove(client, auth_headers):
    client.post("/api/cart", json={"productId": "3", "quantity": 1}, headers=auth_headers)

    resp = client.put("/api/cart", json={"productId": "3", "quantity": 4}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["quantity"] == 4

    resp = client.put("/api/cart", json={"productId": "3", "quantity": 0}, headers=auth_headers)
    assert resp.get_json() == {"message": "Item removed from cart"}
    assert client.get("/api/cart", headers=auth_headers).get_json() == []


def test_update_validation(client, auth_headers):
    resp = client.put("/api/cart", json={"productId": "3"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Missing required fields"

    resp = client.put("/api/cart", json={"productId": "3", "quantity": 2}, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Cart item not found"

    client.post("/api/cart", json={"productId": "3"}, headers=auth_headers)
    for junk in ("--2", "two", 2.5):
        resp = client.put("/api/cart", json={"productId": "3", "quantity": junk}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Quantity must be an integer"
    assert client.get("/api/cart", headers=auth_headers).get_json()[0]["quantity"] == 1


def test_stock_limits_the_whole_cart_line(client, auth_headers):
    resp = client.post("/api/cart", json={"productId": "5", "quantity": 20}, headers=auth_headers)
    assert resp.status_code == 200

    resp = client.post("/api/cart", json={"productId": "5", "quantity": 1}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Insufficient stock"

    resp = client.put("/api/cart", json={"productId": "5", "quantity": 21}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Insufficient stock"
    assert client.get("/api/cart", headers=auth_headers).get_json()[0]["quantity"] == 20

    resp = client.put("/api/cart", json={"productId": "5", "quantity": 5}, headers=auth_headers)
    assert resp.get_json()["quantity"] == 5


def test_delete(client, auth_headers):
    assert client.delete("/api/cart", headers=auth_headers).status_code == 400
    assert client.delete("/api/cart?productId=2", headers=auth_headers).status_code == 404

    client.post("/api/cart", json={"productId": "2"}, headers=auth_headers)
    resp = client.delete("/api/cart?productId=2", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Item removed from cart"}


def test_carts_are_per_user(app, register):
    ada = {"Authorization": f"Bearer {register(app.test_client(), email='ada@example.com')}"}
    bob = {"Authorization": f"Bearer {register(app.test_client(), email='bob@example.com')}"}
    client = app.test_client()

    client.post("/api/cart", json={"productId": "1"}, headers=ada)
    assert client.get("/api/cart", headers=bob).get_json() == []


def test_products_endpoint(client):
    body = client.get("/api/products?category=Furniture").get_json()
    assert [p["id"] for p in body["products"]] == ["5"]
    assert body["categories"][0] == "All"
    assert get_product("5")["stock"] == 20
