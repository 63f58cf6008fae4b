from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from app.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String(255), unique=True, nullable=True)

    vendor = relationship("VendorModel", back_populates="user", uselist=False)
