#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import UserModel
from app.data.models.vendor import VendorModel
from app.data.models.product import ProductModel
from app.data.models.cart_item import CartItemModel
from app.data.models.order import OrderModel, OrderItemModel

__all__ = [
    "UserModel",
    "VendorModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
]
