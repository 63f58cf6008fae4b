#app/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.data.database import get_db
from app.domain.errors import BadRequestError, ForbiddenError, NotFoundError
from app.domain.schemas import (
    CartItemIn,
    CartItemUpdate,
    CartMutationOut,
    CartOut,
    CartValidationOut,
)
from app.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.get_cart(user_id)


@router.get("/validate", response_model=CartValidationOut)
def validate_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.validate_cart(user_id)


@router.post("/items", response_model=CartMutationOut)
def add_item(
    payload: CartItemIn,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_to_cart(
            user_id=user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.patch("/items/{cart_item_id}", response_model=CartMutationOut)
def update_item(
    cart_item_id: int,
    payload: CartItemUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user_id, cart_item_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)
    except BadRequestError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.delete("/items/{cart_item_id}", response_model=CartMutationOut)
def remove_item(
    cart_item_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_item(user_id, cart_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=e.message)


@router.delete("", response_model=CartMutationOut)
def clear_cart(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.clear_cart(user_id)
