# app/domain/order_status.py
import enum

from app.domain.errors import BadRequestError


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})

#PENDING -> CONFIRMED -> SHIPPED -> DELIVERED, bez cofania
#przeskoki do przodu dozwolone (np PENDING -> DELIVERED)
VENDOR_TRANSITIONS = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.CONFIRMED: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

#klient moze anulowac tylko przed wysylka
CUSTOMER_CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})


def ensure_vendor_transition(current: OrderStatus, target: OrderStatus) -> None:
    current = OrderStatus(current)
    target = OrderStatus(target)

    #stan koncowy odrzucamy niezaleznie od docelowego statusu
    if current == OrderStatus.CANCELLED:
        raise BadRequestError("Cannot update a cancelled order")

    if current == OrderStatus.DELIVERED:
        raise BadRequestError("Cannot update a delivered order")

    if target not in VENDOR_TRANSITIONS[current]:
        raise BadRequestError(
            f"Cannot change order status from {current.value} to {target.value}"
        )


def ensure_customer_cancellable(current: OrderStatus) -> None:
    current = OrderStatus(current)
    if current not in CUSTOMER_CANCELLABLE:
        raise BadRequestError(f"Cannot cancel order with status {current.value}")
