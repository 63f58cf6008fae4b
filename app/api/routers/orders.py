# app/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.data.database import get_db
from app.domain.errors import BadRequestError, ForbiddenError, NotFoundError
from app.domain.order_status import OrderStatus
from app.domain.schemas import (
    OrderCancel,
    OrderCreate,
    OrderListOut,
    OrderMutationOut,
    OrderOut,
    OrdersCreatedOut,
    OrderStatusUpdate,
)
from app.services.order_service import OrderService
from app.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrdersCreatedOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Checkout: tworzy jedno zamówienie na sprzedawcę z koszyka.
    Wysyła powiadomienia asynchronicznie.
    """
    svc = get_service(db)
    try:
        return svc.create_order(user_id, payload.shipping_address)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.get("", response_model=OrderListOut)
def get_my_orders(
    status: OrderStatus | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_my_orders(user_id, status=status, page=page, limit=limit)


@router.get("/vendor", response_model=OrderListOut)
def get_vendor_orders(
    status: OrderStatus | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_vendor_orders(user_id, status=status, page=page, limit=limit)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegóły zamówienia (klient albo sprzedawca).
    """
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.patch("/{order_id}/status", response_model=OrderMutationOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_order_status(order_id, user_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.post("/{order_id}/cancel", response_model=OrderMutationOut)
def cancel_order(
    order_id: int,
    payload: OrderCancel | None = None,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    reason = payload.reason if payload else None
    try:
        return svc.cancel_order(order_id, user_id, reason)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)
