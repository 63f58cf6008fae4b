# app/repos/order_repo.py
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, joinedload, selectinload

from app.data.models.order import OrderModel, OrderItemModel
from app.data.models.vendor import VendorModel
from app.domain.order_status import OrderStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def _with_details(self, stmt):
        return stmt.options(
            selectinload(OrderModel.items).joinedload(OrderItemModel.product),
            joinedload(OrderModel.vendor).joinedload(VendorModel.user),
            joinedload(OrderModel.user),
        )

    def create_order(self, order: OrderModel) -> OrderModel:
        #bez commita, commit robi serwis na koncu transakcji
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            self._with_details(select(OrderModel)).where(OrderModel.id == order_id)
        ).unique().scalar_one_or_none()

    def list_orders(
        self,
        *,
        user_id: int | None = None,
        vendor_id: int | None = None,
        status: OrderStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[OrderModel], int]:
        filters = []
        if user_id is not None:
            filters.append(OrderModel.user_id == user_id)
        if vendor_id is not None:
            filters.append(OrderModel.vendor_id == vendor_id)
        if status is not None:
            filters.append(OrderModel.status == status)

        total_count = self.db.execute(
            select(func.count(OrderModel.id)).where(*filters)
        ).scalar_one()

        orders = self.db.execute(
            self._with_details(select(OrderModel))
            .where(*filters)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).unique().scalars().all()

        return list(orders), total_count

    def update_order_status(
        self,
        order_id: int,
        old_status: OrderStatus,
        new_data: dict,
    ) -> int:
        #compare-and-set na statusie, analogicznie do optimistic locking na wersji
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id, OrderModel.status == old_status)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
