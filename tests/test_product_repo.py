import pytest
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from app.data.models import ProductModel
from app.repos.product_repo import ProductRepo


@pytest.fixture
def mug(factory):
    vendor = factory.vendor("Pottery")
    return factory.product(vendor, name="Mug", stock=1)


def stock_of(db, product):
    db.expire_all()
    return db.get(ProductModel, product.id).stock


def test_decrement_refuses_to_go_below_zero(db, mug):
    repo = ProductRepo(db)

    assert repo.decrement_stock(mug.id, 2) is False
    assert stock_of(db, mug) == 1

    assert repo.decrement_stock(mug.id, 1) is True
    assert stock_of(db, mug) == 0

    assert repo.decrement_stock(mug.id, 1) is False
    assert stock_of(db, mug) == 0


def test_decrement_of_missing_product(db, mug):
    assert ProductRepo(db).decrement_stock(9999, 1) is False


def test_increment_restores_stock(db, mug):
    repo = ProductRepo(db)
    repo.decrement_stock(mug.id, 1)

    repo.increment_stock(mug.id, 3)

    assert stock_of(db, mug) == 3


def test_negative_stock_is_rejected_by_the_database(db, mug):
    with pytest.raises(IntegrityError):
        db.execute(update(ProductModel).where(ProductModel.id == mug.id).values(stock=-1))
    db.rollback()

    assert stock_of(db, mug) == 1
