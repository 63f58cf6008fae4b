# app/repos/product_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from app.data.models.product import ProductModel


class ProductRepo:
    """
    Stan magazynowy zmieniany tylko atomowo po stronie bazy,
    nigdy read-modify-write w aplikacji.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel)
            .options(joinedload(ProductModel.vendor))
            .where(ProductModel.id == product_id)
        ).scalar_one_or_none()

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        #update products set stock = stock - q where id = ? and stock >= q
        #0 rows affected = ktos inny wykupil w miedzyczasie
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increment_stock(self, product_id: int, quantity: int) -> None:
        self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock=ProductModel.stock + quantity)
            .execution_options(synchronize_session=False)
        )
