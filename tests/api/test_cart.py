from decimal import Decimal
from services.collection_client import CART_ITEMS


async def sign_in(client, shopper):
    response = await client.post("/auth/login", json={
        "email": shopper["email"],
        "password": shopper["password"]
    })
    assert response.status_code == 200


async def test_anonymous_cart_is_empty(client):
    response = await client.get("/cart")

    assert response.status_code == 200
    data = response.json()
    assert data["lines"] == []
    assert data["item_count"] == 0
    assert Decimal(data["total"]) == 0


async def test_add_requires_sign_in(client):
    response = await client.post("/cart/items", json={"product_id": "p1"})

    assert response.status_code == 401


async def test_add_same_product_twice(client, shopper):
    await sign_in(client, shopper)

    await client.post("/cart/items", json={"product_id": "p1"})
    response = await client.post("/cart/items", json={"product_id": "p1"})

    assert response.status_code == 200
    data = response.json()
    assert len(data["lines"]) == 1
    assert data["lines"][0]["item"]["quantity"] == 2
    assert data["item_count"] == 2
    assert Decimal(data["total"]) == Decimal("39.98")
    assert Decimal(data["lines"][0]["line_total"]) == Decimal("39.98")


async def test_update_and_remove(client, shopper):
    await sign_in(client, shopper)
    data = (await client.post("/cart/items", json={"product_id": "p3"})).json()
    item_id = data["lines"][0]["item"]["id"]

    data = (await client.patch(f"/cart/items/{item_id}", json={"quantity": 3})).json()
    assert data["item_count"] == 3
    assert Decimal(data["total"]) == Decimal("750.00")

    data = (await client.patch(f"/cart/items/{item_id}", json={"quantity": 0})).json()
    assert data["lines"] == []

    await client.post("/cart/items", json={"product_id": "p2"})
    data = (await client.get("/cart")).json()
    item_id = data["lines"][0]["item"]["id"]

    data = (await client.delete(f"/cart/items/{item_id}")).json()
    assert data["item_count"] == 0


async def test_clear_cart(client, shopper):
    await sign_in(client, shopper)
    for product_id in ["p1", "p2", "p3"]:
        await client.post("/cart/items", json={"product_id": product_id})

    response = await client.delete("/cart")

    assert response.status_code == 200
    assert response.json()["item_count"] == 0


async def test_cart_panel(client):
    response = await client.put("/cart/panel", json={"is_open": True})
    assert response.json()["is_open"] is True

    response = await client.put("/cart/panel", json={"is_open": False})
    assert response.json()["is_open"] is False


async def test_logout_empties_cart(client, shopper):
    await sign_in(client, shopper)
    await client.post("/cart/items", json={"product_id": "p1"})

    await client.post("/auth/logout")

    data = (await client.get("/cart")).json()
    assert data["item_count"] == 0


async def test_cart_commands_require_sign_in(client):
    response = await client.patch("/cart/items/cart_1", json={"quantity": 2})

    assert response.status_code == 401
    assert response.json()["detail"] == "Sign in required"


async def test_cannot_change_another_shoppers_line(client, collection_client, shopper, other_shopper):
    await collection_client.create(CART_ITEMS, {
        "id": "cart_other", "user_id": other_shopper["id"], "product_id": "p1", "quantity": 1
    })
    await sign_in(client, shopper)

    patched = await client.patch("/cart/items/cart_other", json={"quantity": 7})
    deleted = await client.delete("/cart/items/cart_other")

    assert patched.status_code == 200
    assert deleted.status_code == 200
    assert deleted.json()["lines"] == []
    rows = await collection_client.list(CART_ITEMS, where={"id": "cart_other"})
    assert rows[0]["quantity"] == 1
