# app/domain/cart_rules.py
from collections import OrderedDict

from app.data.models.cart_item import CartItemModel
from app.domain.errors import BadRequestError


def ensure_purchasable(item: CartItemModel) -> None:
    """Walidacja jednej pozycji przed checkoutem, komunikat nazywa produkt."""
    product = item.product

    if not product.is_active:
        raise BadRequestError(f'Product "{product.name}" is no longer available')

    if not product.vendor.is_approved:
        raise BadRequestError(f'Vendor for "{product.name}" is no longer approved')

    if item.quantity > product.stock:
        raise BadRequestError(
            f'Insufficient stock for "{product.name}". Only {product.stock} available.'
        )


def find_issue(item: CartItemModel) -> str | None:
    #jedna pozycja = max jeden problem, kolejnosc: aktywny -> sprzedawca -> stan
    product = item.product

    if not product.is_active:
        return "Product is no longer available"

    if not product.vendor.is_approved:
        return "Vendor is no longer approved"

    if item.quantity > product.stock:
        return f"Only {product.stock} items available (you have {item.quantity} in cart)"

    return None


def group_by_vendor(items: list[CartItemModel]) -> "OrderedDict[int, list[CartItemModel]]":
    groups: OrderedDict[int, list[CartItemModel]] = OrderedDict()
    for item in items:
        groups.setdefault(item.product.vendor_id, []).append(item)
    return groups
