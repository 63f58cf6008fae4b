import os

#przed importem app.*: sqlite w pamieci, celery bez brokera
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.data.database import Base, SessionLocal, engine, get_db
from app.data.models import CartItemModel, ProductModel, UserModel, VendorModel
from app.main import app


class FakeNotifier:
    def __init__(self):
        self.placed = []
        self.status_changes = []

    def send_order_notification(self, user_id, order_id):
        self.placed.append((user_id, order_id))

    def send_status_notification(self, user_id, order_id, status):
        self.status_changes.append((user_id, order_id, status))


class Factory:
    def __init__(self, db):
        self.db = db
        self._next_user_id = 1

    def user(self, name="Customer"):
        user = UserModel(id=self._next_user_id, name=name, email=f"user{self._next_user_id}@example.com")
        self._next_user_id += 1
        self.db.add(user)
        self.db.commit()
        return user

    def vendor(self, shop_name="Shop", is_approved=True):
        owner = self.user(name=f"{shop_name} owner")
        vendor = VendorModel(user_id=owner.id, shop_name=shop_name, is_approved=is_approved)
        self.db.add(vendor)
        self.db.commit()
        return vendor

    def product(self, vendor, name="Product", price="10.00", stock=5, is_active=True):
        product = ProductModel(
            vendor_id=vendor.id,
            name=name,
            price=Decimal(price),
            stock=stock,
            is_active=is_active,
        )
        self.db.add(product)
        self.db.commit()
        return product

    def cart_item(self, user, product, quantity):
        item = CartItemModel(user_id=user.id, product_id=product.id, quantity=quantity)
        self.db.add(item)
        self.db.commit()
        return item


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def two_vendor_cart(factory):
    """
    P1 (V1, 10.00, stock 5) x2 i P2 (V2, 5.00, stock 1) x1.
    """
    customer = factory.user()
    v1 = factory.vendor("Vendor One")
    v2 = factory.vendor("Vendor Two")
    p1 = factory.product(v1, name="P1", price="10.00", stock=5)
    p2 = factory.product(v2, name="P2", price="5.00", stock=1)
    factory.cart_item(customer, p1, 2)
    factory.cart_item(customer, p2, 1)
    return {"customer": customer, "v1": v1, "v2": v2, "p1": p1, "p2": p2}


@pytest.fixture
def client(db):
    def override_get_db():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
