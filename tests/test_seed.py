from app.data.models import ProductModel, VendorModel
from app.data.seed import seed
from app.services.order_service import OrderService
from app.services.cart_service import CartService


def test_seed_is_idempotent(db):
    assert seed(db) is True
    assert seed(db) is False

    assert db.query(VendorModel).count() == 2
    assert db.query(ProductModel).count() == 4


def test_seeded_catalog_supports_checkout(db, notifier):
    seed(db)
    mug = db.query(ProductModel).filter(ProductModel.name == "Stoneware Mug").one()
    board = db.query(ProductModel).filter(ProductModel.name == "Oak Cutting Board").one()

    carts = CartService(db)
    carts.add_to_cart(1, mug.id, 2)
    carts.add_to_cart(1, board.id, 1)

    result = OrderService(db, notification_service=notifier).create_order(1, "Demo Street 1, Krakow")

    assert len(result["orders"]) == 2
