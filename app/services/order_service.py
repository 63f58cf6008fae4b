# app/services/order_service.py
import math
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel, OrderItemModel
from app.domain.cart_rules import ensure_purchasable, group_by_vendor
from app.domain.errors import BadRequestError, NotFoundError
from app.domain.order_status import (
    OrderStatus,
    ensure_customer_cancellable,
    ensure_vendor_transition,
)
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.services.access import OrderAccess
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger
from app.utils.retry import db_retry
from app.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

logger = get_logger(__name__)


def serialize_order(order: OrderModel) -> Dict[str, Any]:
    vendor = order.vendor
    return {
        "id": order.id,
        "user_id": order.user_id,
        "vendor_id": order.vendor_id,
        "shop_name": vendor.shop_name if vendor else None,
        "vendor_name": vendor.user.name if vendor and vendor.user else None,
        "customer_name": order.user.name if order.user else None,
        "shipping_address": order.shipping_address,
        "total": order.total,
        "status": order.status,
        "cancellation_reason": order.cancellation_reason,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "items": [
            {
                "id": i.id,
                "product_id": i.product_id,
                "product_name": i.product.name if i.product else None,
                "quantity": i.quantity,
                "price": i.price,
                "subtotal": i.price * i.quantity,
            }
            for i in order.items
        ],
    }


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.

    - checkout: koszyk -> jedno zamowienie na sprzedawce, w jednej transakcji
    - zmiany statusu przez sprzedawce (maszyna stanow z order_status)
    - anulowanie przez klienta
    Anulowanie zawsze oddaje stan magazynowy w tej samej transakcji.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.access = OrderAccess(db)
        self.notification_service = notification_service or NotificationService()

    #commands
    def create_order(self, user_id: int, shipping_address: str) -> Dict[str, Any]:
        """
        Use Case: Tworzenie zamowien z koszyka.

        1. Pobiera koszyk z produktami i sprzedawcami
        2. Waliduje wszystkie pozycje (pierwszy blad przerywa calosc)
        3. Grupuje po sprzedawcy, tworzy zamowienia PENDING z cenami z tej chwili
        4. Zdejmuje stan warunkowo (stock >= quantity)
        5. Czysci koszyk
        Wszystko albo nic: kazdy wyjatek -> rollback.
        """
        order_ids = self._place_orders(user_id, shipping_address)

        logger.info(f"Created {len(order_ids)} order(s) {order_ids} for user {user_id}")

        #zamowienia juz zapisane, checkout nie jest powtarzany
        orders = self._load_orders(order_ids)

        for order_id in order_ids:
            self.notification_service.send_order_notification(user_id, order_id)

        return {
            "success": True,
            "message": f"Successfully created {len(orders)} order(s)",
            "orders": orders,
        }

    @db_retry()
    def _place_orders(self, user_id: int, shipping_address: str) -> list[int]:
        try:
            order_ids = self._checkout(user_id, shipping_address)
            self.repo.commit()
        except BadRequestError as e:
            self.repo.rollback()
            logger.warning(f"Checkout rejected for user {user_id}: {e.message}")
            raise
        except Exception as e:
            self.repo.rollback()
            logger.error(f"Checkout failed for user {user_id}: {e}")
            raise

        return order_ids

    @db_retry()
    def _load_orders(self, order_ids: list[int]) -> list[Dict[str, Any]]:
        try:
            return [serialize_order(self.repo.get_order(order_id)) for order_id in order_ids]
        except OperationalError:
            self.repo.rollback()
            raise

    def _checkout(self, user_id: int, shipping_address: str) -> list[int]:
        items = self.cart_repo.get_cart_items(user_id)

        if not items:
            raise BadRequestError("Your cart is empty")

        #caly koszyk walidowany zanim cokolwiek zmienimy
        for item in items:
            ensure_purchasable(item)

        orders = []

        for vendor_id, group in group_by_vendor(items).items():
            total = sum((i.product.price * i.quantity for i in group), Decimal("0.00"))

            order = OrderModel(
                user_id=user_id,
                vendor_id=vendor_id,
                shipping_address=shipping_address,
                total=total,
                status=OrderStatus.PENDING,
                items=[
                    OrderItemModel(
                        product_id=i.product_id,
                        quantity=i.quantity,
                        price=i.product.price,
                    )
                    for i in group
                ],
            )
            self.repo.create_order(order)

            logger.info(
                f"Order {order.id} for vendor {vendor_id}: {len(group)} item(s), total {total}"
            )
            orders.append(order)

        #stala kolejnosc blokad wierszy: po product_id
        for i in sorted(items, key=lambda i: i.product_id):
            #odczyt z walidacji moze byc juz nieaktualny
            if not self.product_repo.decrement_stock(i.product_id, i.quantity):
                raise BadRequestError(
                    f'Insufficient stock for "{i.product.name}". '
                    f"It was purchased by someone else, please review your cart."
                )

        removed = self.cart_repo.clear_cart(user_id)
        logger.info(f"Cleared {removed} cart item(s) for user {user_id}")

        return [order.id for order in orders]

    def update_order_status(self, order_id: int, user_id: int, status: OrderStatus) -> Dict[str, Any]:
        """
        Use Case: Zmiana statusu przez sprzedawce.
        DELIVERED i CANCELLED sa koncowe.
        """
        status = OrderStatus(status)
        vendor = self.access.vendor_profile(user_id)

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        self.access.require_vendor(order, vendor, "You can only update your own orders")
        ensure_vendor_transition(order.status, status)

        self._transition(order, status)

        logger.info(f"Vendor {vendor.id} moved order {order_id} to {status.value}")

        updated = self.repo.get_order(order_id)
        self.notification_service.send_status_notification(updated.user_id, order_id, status.value)

        return {
            "success": True,
            "message": f"Order status updated to {status.value}",
            "order": serialize_order(updated),
        }

    def cancel_order(self, order_id: int, user_id: int, reason: str | None = None) -> Dict[str, Any]:
        """
        Use Case: Anulowanie przez klienta (tylko PENDING / CONFIRMED).
        """
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        self.access.require_customer(order, user_id, "You can only cancel your own orders")
        ensure_customer_cancellable(order.status)

        self._transition(order, OrderStatus.CANCELLED, reason=reason)

        logger.info(f"User {user_id} cancelled order {order_id} (reason: {reason or '-'})")

        updated = self.repo.get_order(order_id)
        self.notification_service.send_status_notification(
            user_id, order_id, OrderStatus.CANCELLED.value
        )

        return {
            "success": True,
            "message": "Order cancelled successfully",
            "order": serialize_order(updated),
        }

    def _transition(self, order: OrderModel, status: OrderStatus, reason: str | None = None) -> None:
        new_data = {"status": status}
        if reason:
            new_data["cancellation_reason"] = reason

        try:
            # compare-and-set, np update orders set status CANCELLED where id 1 and status PENDING
            rowcount = self.repo.update_order_status(
                order_id=order.id,
                old_status=order.status,
                new_data=new_data,
            )

            if rowcount == 0:
                raise BadRequestError(
                    "Order was modified by another request, please reload and try again"
                )

            if status == OrderStatus.CANCELLED:
                for item in sorted(order.items, key=lambda i: i.product_id):
                    self.product_repo.increment_stock(item.product_id, item.quantity)
                logger.info(f"Restored stock for {len(order.items)} item(s) of order {order.id}")

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

    #queries
    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamowienia (klient albo sprzedawca).
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        self.access.require_participant(order, user_id)

        return serialize_order(order)

    def get_my_orders(
        self,
        user_id: int,
        status: OrderStatus | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        return self._paginate(user_id=user_id, status=status, page=page, limit=limit)

    def get_vendor_orders(
        self,
        user_id: int,
        status: OrderStatus | None = None,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        vendor = self.access.vendor_profile(user_id)
        return self._paginate(vendor_id=vendor.id, status=status, page=page, limit=limit)

    def _paginate(self, *, status, page, limit, user_id=None, vendor_id=None) -> Dict[str, Any]:
        if page < 1:
            raise BadRequestError("Page must be at least 1")

        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise BadRequestError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        orders, total_count = self.repo.list_orders(
            user_id=user_id,
            vendor_id=vendor_id,
            status=OrderStatus(status) if status else None,
            page=page,
            limit=limit,
        )

        return {
            "orders": [serialize_order(o) for o in orders],
            "pagination": {
                "page": page,
                "limit": limit,
                "total_count": total_count,
                "total_pages": math.ceil(total_count / limit),
            },
        }
