"""
Shop database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from kanaku.database import Base


class Shop(Base):
    """A tenant. Every catalog, billing and stock row belongs to one shop."""

    __tablename__ = "shops"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    name_tamil = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    gstin = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="owned_shops")
    employees = relationship("ShopEmployee", back_populates="shop", cascade="all, delete-orphan")
    categories = relationship("Category", back_populates="shop", cascade="all, delete-orphan")
    brands = relationship("Brand", back_populates="shop", cascade="all, delete-orphan")
    price_types = relationship("PriceType", back_populates="shop", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="shop", cascade="all, delete-orphan")
    bills = relationship("Bill", back_populates="shop", cascade="all, delete-orphan")
    suppliers = relationship("Supplier", back_populates="shop", cascade="all, delete-orphan")
