"""
PriceType database model (e.g. Retail, Wholesale).
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from kanaku.database import Base


class PriceType(Base):
    """Named price list. At most one per shop has is_default set."""

    __tablename__ = "price_types"

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    shop = relationship("Shop", back_populates="price_types")
    product_prices = relationship("ProductPrice", back_populates="price_type", cascade="all, delete-orphan")
