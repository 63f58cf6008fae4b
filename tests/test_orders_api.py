from decimal import Decimal

ADDRESS = "221B Baker Street, London NW1 6XE"


def headers(user):
    return {"X-User-Id": str(user.id)}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_requires_identity(client):
    assert client.get("/orders").status_code == 401
    assert client.get("/orders", headers={"X-User-Id": "777"}).status_code == 401


def test_checkout_flow(client, two_vendor_cart):
    customer = two_vendor_cart["customer"]

    resp = client.post("/orders", json={"shipping_address": ADDRESS}, headers=headers(customer))

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    totals = sorted(Decimal(o["total"]) for o in body["orders"])
    assert totals == [Decimal("5.00"), Decimal("20.00")]
    assert {o["status"] for o in body["orders"]} == {"PENDING"}

    cart = client.get("/cart", headers=headers(customer)).json()
    assert cart["summary"]["vendor_count"] == 0

    listed = client.get("/orders", params={"limit": 1}, headers=headers(customer)).json()
    assert listed["pagination"]["total_count"] == 2
    assert listed["pagination"]["total_pages"] == 2


def test_checkout_validation(client, factory, two_vendor_cart):
    customer = two_vendor_cart["customer"]

    short = client.post("/orders", json={"shipping_address": "short"}, headers=headers(customer))
    assert short.status_code == 422

    empty_user = factory.user("Empty")
    empty = client.post("/orders", json={"shipping_address": ADDRESS}, headers=headers(empty_user))
    assert empty.status_code == 400
    assert empty.json()["detail"] == "Your cart is empty"


def test_checkout_names_offending_product(client, db, two_vendor_cart):
    two_vendor_cart["p2"].stock = 0
    db.commit()

    resp = client.post(
        "/orders", json={"shipping_address": ADDRESS}, headers=headers(two_vendor_cart["customer"])
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == 'Insufficient stock for "P2". Only 0 available.'


def test_vendor_status_update_and_permissions(client, two_vendor_cart):
    customer = two_vendor_cart["customer"]
    v1_owner = two_vendor_cart["v1"].user
    v2_owner = two_vendor_cart["v2"].user
    orders = client.post("/orders", json={"shipping_address": ADDRESS}, headers=headers(customer)).json()["orders"]
    order_id = next(o["id"] for o in orders if o["vendor_id"] == two_vendor_cart["v1"].id)
    url = f"/orders/{order_id}/status"

    assert client.patch(url, json={"status": "PENDING"}, headers=headers(v1_owner)).status_code == 422
    assert client.patch(url, json={"status": "SHIPPED"}, headers=headers(v2_owner)).status_code == 403
    assert client.patch(url, json={"status": "SHIPPED"}, headers=headers(customer)).status_code == 403
    assert client.patch("/orders/999/status", json={"status": "SHIPPED"}, headers=headers(v1_owner)).status_code == 404

    shipped = client.patch(url, json={"status": "SHIPPED"}, headers=headers(v1_owner))
    assert shipped.status_code == 200
    assert shipped.json()["order"]["status"] == "SHIPPED"

    cancel = client.post(f"/orders/{order_id}/cancel", json={}, headers=headers(customer))
    assert cancel.status_code == 400

    delivered = client.patch(url, json={"status": "DELIVERED"}, headers=headers(v1_owner))
    assert delivered.status_code == 200

    again = client.patch(url, json={"status": "CANCELLED"}, headers=headers(v1_owner))
    assert again.status_code == 400
    assert again.json()["detail"] == "Cannot update a delivered order"

    vendor_view = client.get("/orders/vendor", params={"status": "DELIVERED"}, headers=headers(v1_owner)).json()
    assert [o["id"] for o in vendor_view["orders"]] == [order_id]
    assert client.get("/orders/vendor", headers=headers(customer)).status_code == 403


def test_customer_cancel(client, db, factory, two_vendor_cart):
    customer = two_vendor_cart["customer"]
    orders = client.post("/orders", json={"shipping_address": ADDRESS}, headers=headers(customer)).json()["orders"]
    order_id = next(o["id"] for o in orders if o["vendor_id"] == two_vendor_cart["v2"].id)

    stranger = factory.user("Stranger")
    assert client.get(f"/orders/{order_id}", headers=headers(stranger)).status_code == 403
    assert client.post(f"/orders/{order_id}/cancel", json={}, headers=headers(stranger)).status_code == 403
    assert client.post(f"/orders/{order_id}/cancel", json={"reason": "no"}, headers=headers(customer)).status_code == 422

    resp = client.post(f"/orders/{order_id}/cancel", json={"reason": "Ordered by mistake"}, headers=headers(customer))

    assert resp.status_code == 200
    assert resp.json()["order"]["status"] == "CANCELLED"
    assert resp.json()["order"]["cancellation_reason"] == "Ordered by mistake"

    db.expire_all()
    assert two_vendor_cart["p2"].stock == 1

    assert client.get("/orders/31337", headers=headers(customer)).status_code == 404
