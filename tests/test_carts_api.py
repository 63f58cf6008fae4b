def headers(user):
    return {"X-User-Id": str(user.id)}


def test_cart_round_trip(client, factory):
    customer = factory.user()
    vendor = factory.vendor("Books")
    book = factory.product(vendor, name="Novel", price="7.50", stock=3)

    added = client.post("/cart/items", json={"product_id": book.id, "quantity": 2}, headers=headers(customer))
    assert added.status_code == 200
    item_id = added.json()["cart_item_id"]

    too_many = client.post("/cart/items", json={"product_id": book.id, "quantity": 2}, headers=headers(customer))
    assert too_many.status_code == 400
    assert too_many.json()["detail"].startswith("Only 3 items available in stock")

    over_cap = client.post("/cart/items", json={"product_id": book.id, "quantity": 101}, headers=headers(customer))
    assert over_cap.status_code == 422

    missing = client.post("/cart/items", json={"product_id": 999, "quantity": 1}, headers=headers(customer))
    assert missing.status_code == 404

    cart = client.get("/cart", headers=headers(customer)).json()
    assert cart["summary"]["grand_total"] == "15.00"
    assert cart["vendors"][0]["items"][0]["id"] == item_id
    assert cart["vendors"][0]["vendor_name"] == "Books owner"

    assert client.get("/cart/validate", headers=headers(customer)).json() == {"is_valid": True, "issues": []}

    updated = client.patch(f"/cart/items/{item_id}", json={"quantity": 3}, headers=headers(customer))
    assert updated.status_code == 200

    other = factory.user("Other")
    assert client.delete(f"/cart/items/{item_id}", headers=headers(other)).status_code == 403

    assert client.delete(f"/cart/items/{item_id}", headers=headers(customer)).status_code == 200
    assert client.delete(f"/cart/items/{item_id}", headers=headers(customer)).status_code == 404

    cleared = client.delete("/cart", headers=headers(customer))
    assert cleared.json()["items_removed"] == 0


def test_users(client):
    created = client.post("/users/", json={"id": 50, "name": "Ola", "email": "ola@example.com"})
    assert created.status_code == 200
    assert client.get("/users/50").json()["email"] == "ola@example.com"
    assert client.get("/users/51").status_code == 404

    taken = client.post("/users/", json={"id": 52, "name": "Ola2", "email": "ola@example.com"})
    assert taken.status_code == 400
