# app/repos/cart_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload

from app.data.models.cart_item import CartItemModel
from app.data.models.product import ProductModel
from app.data.models.vendor import VendorModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: int, newest_first: bool = False) -> list[CartItemModel]:
        #produkt + sprzedawca (+ wlasciciel sklepu) w jednym zapytaniu
        order_by = (
            (CartItemModel.created_at.desc(), CartItemModel.id.desc())
            if newest_first
            else (CartItemModel.id,)
        )
        return list(
            self.db.execute(
                select(CartItemModel)
                .options(
                    joinedload(CartItemModel.product)
                    .joinedload(ProductModel.vendor)
                    .joinedload(VendorModel.user)
                )
                .where(CartItemModel.user_id == user_id)
                .order_by(*order_by)
            ).scalars().all()
        )

    def get_cart_item(self, cart_item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.id == cart_item_id)
        ).scalar_one_or_none()

    def get_user_item(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_cart(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
