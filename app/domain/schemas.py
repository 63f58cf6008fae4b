# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List
from decimal import Decimal
from datetime import datetime

from app.domain.order_status import OrderStatus
from app.utils.settings import MAX_CART_QUANTITY


class UserCreate(BaseModel):
    """Schema dla tworzenia użytkownika."""

    id: int = Field(..., gt=0, description="ID użytkownika (musi być > 0)")
    name: str = Field(..., min_length=1, max_length=100, description="Imię użytkownika")
    email: str | None = Field(default=None, max_length=255)


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    name: str
    email: str | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CART
# =====================================================
class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, le=MAX_CART_QUANTITY, description="Ilość produktu (1..100)")


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0, le=MAX_CART_QUANTITY)


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: int
    product_id: int
    product_name: str
    quantity: int
    price: Decimal
    stock: int


class CartVendorGroup(BaseModel):
    vendor_id: int
    shop_name: str
    vendor_name: str | None = None
    items: List[CartItemOut]
    subtotal: Decimal
    item_count: int


class CartSummary(BaseModel):
    grand_total: Decimal
    total_items: int
    vendor_count: int


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    vendors: List[CartVendorGroup]
    summary: CartSummary


class CartMutationOut(BaseModel):
    success: bool
    message: str
    cart_item_id: int | None = None
    quantity: int | None = None
    items_removed: int | None = None


class CartIssue(BaseModel):
    cart_item_id: int
    product_name: str
    issue: str


class CartValidationOut(BaseModel):
    is_valid: bool
    issues: List[CartIssue]


# =====================================================
# ORDERS
# =====================================================
class OrderCreate(BaseModel):
    """Schema dla tworzenia zamówienia."""

    shipping_address: str = Field(..., min_length=10, max_length=500, description="Adres dostawy")


class OrderStatusUpdate(BaseModel):
    status: OrderStatus

    @field_validator("status")
    @classmethod
    def not_pending(cls, v: OrderStatus) -> OrderStatus:
        #PENDING nie jest dozwolonym celem
        if v == OrderStatus.PENDING:
            raise ValueError("Status must be one of CONFIRMED, SHIPPED, DELIVERED, CANCELLED")
        return v


class OrderCancel(BaseModel):
    reason: str | None = Field(default=None, min_length=5, max_length=500)


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    product_name: str | None = None
    quantity: int
    price: Decimal
    subtotal: Decimal


class OrderOut(BaseModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int
    vendor_id: int
    shop_name: str | None = None
    vendor_name: str | None = None
    customer_name: str | None = None
    shipping_address: str
    total: Decimal
    status: OrderStatus
    cancellation_reason: str | None = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut]

    model_config = ConfigDict(from_attributes=True)


class OrdersCreatedOut(BaseModel):
    success: bool
    message: str
    orders: List[OrderOut]


class OrderMutationOut(BaseModel):
    success: bool
    message: str
    order: OrderOut


class Pagination(BaseModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    pagination: Pagination
