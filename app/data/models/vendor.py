from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.data.database import Base


class VendorModel(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True)
    #1:1 z userem
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    shop_name = Column(String(120), nullable=False)
    is_approved = Column(Boolean, nullable=False, default=False)

    user = relationship("UserModel", back_populates="vendor")
    products = relationship("ProductModel", back_populates="vendor")
