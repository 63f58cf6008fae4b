# app/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.database import Base, SessionLocal, engine
from app.data.models import ProductModel, UserModel, VendorModel

DEMO_USERS = [
    {"id": 1, "name": "Demo Customer", "email": "customer@markethub.dev"},
    {"id": 2, "name": "Anna Kowalska", "email": "anna@markethub.dev"},
    {"id": 3, "name": "Jan Nowak", "email": "jan@markethub.dev"},
]

#user_id -> sklep i jego produkty (nazwa, cena, stan)
DEMO_VENDORS = {
    2: ("Anna's Ceramics", [("Stoneware Mug", "10.00", 5), ("Tea Bowl", "24.50", 12)]),
    3: ("Nowak Woodworks", [("Oak Cutting Board", "5.00", 1), ("Walnut Spoon", "8.90", 30)]),
}


def seed(db: Session | None = None) -> bool:
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).first():
            return False

        for data in DEMO_USERS:
            db.add(UserModel(**data))
        db.flush()

        for user_id, (shop_name, products) in DEMO_VENDORS.items():
            vendor = VendorModel(user_id=user_id, shop_name=shop_name, is_approved=True)
            db.add(vendor)
            db.flush()
            for name, price, stock in products:
                db.add(ProductModel(vendor_id=vendor.id, name=name, price=Decimal(price), stock=stock))

        db.commit()
        return True
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    seed()
