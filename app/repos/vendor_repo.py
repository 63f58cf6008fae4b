# app/repos/vendor_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.vendor import VendorModel


class VendorRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_user(self, user_id: int) -> VendorModel | None:
        return self.db.execute(
            select(VendorModel).where(VendorModel.user_id == user_id)
        ).scalar_one_or_none()
