# app/services/access.py
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.data.models.vendor import VendorModel
from app.domain.errors import ForbiddenError
from app.repos.vendor_repo import VendorRepo


class OrderAccess:
    """
    Jedno miejsce na sprawdzanie wlasnosci zamowienia:
    klient (order.user_id) albo sprzedawca (order.vendor_id).
    """

    def __init__(self, db: Session):
        self.vendors = VendorRepo(db)

    def vendor_profile(self, user_id: int) -> VendorModel:
        vendor = self.vendors.get_by_user(user_id)
        if not vendor:
            raise ForbiddenError("You must be a vendor to perform this action")
        return vendor

    def require_customer(self, order: OrderModel, user_id: int, message: str) -> None:
        if order.user_id != user_id:
            raise ForbiddenError(message)

    def require_vendor(self, order: OrderModel, vendor: VendorModel, message: str) -> None:
        if order.vendor_id != vendor.id:
            raise ForbiddenError(message)

    def require_participant(self, order: OrderModel, user_id: int) -> None:
        if order.user_id == user_id:
            return

        vendor = self.vendors.get_by_user(user_id)
        if vendor is None or order.vendor_id != vendor.id:
            raise ForbiddenError("You don't have permission to view this order")
