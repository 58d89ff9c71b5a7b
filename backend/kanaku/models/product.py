"""
Product and ProductPrice database models.
"""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, Numeric, DateTime, ForeignKey, Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from kanaku.database import Base


class Product(Base):
    """Product model. Stock is only maintained when track_inventory is set."""

    __tablename__ = "products"
    __table_args__ = (
        Index("idx_product_shop_name", "shop_id", "name"),
        Index("idx_product_shop_barcode", "shop_id", "barcode"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    brand_id = Column(Integer, ForeignKey("brands.id", ondelete="SET NULL"), nullable=True, index=True)
    sku = Column(String, nullable=True)
    barcode = Column(String, nullable=True)
    name = Column(String, nullable=False)
    name_tamil = Column(String, nullable=True)
    description = Column(String, nullable=True)
    mrp = Column(Numeric(12, 2), nullable=False, default=0)
    cost_price = Column(Numeric(12, 2), nullable=False, default=0)
    default_selling_price = Column(Numeric(12, 2), nullable=False, default=0)
    gst_percent = Column(Numeric(5, 2), nullable=False, default=0)
    hsn_code = Column(String, nullable=True)
    unit = Column(String, nullable=False, default="pcs")  # pcs, kg, g, l, ml, box, ...
    track_inventory = Column(Boolean, nullable=False, default=False)
    stock_quantity = Column(Numeric(12, 3), nullable=False, default=0)
    low_stock_threshold = Column(Numeric(12, 3), nullable=False, default=0)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    shop = relationship("Shop", back_populates="products")
    category = relationship("Category", back_populates="products")
    brand = relationship("Brand", back_populates="products")
    prices = relationship("ProductPrice", back_populates="product", cascade="all, delete-orphan")
    movements = relationship(
        "StockMovement", back_populates="product", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def is_low_stock(self) -> bool:
        return bool(self.track_inventory) and self.stock_quantity <= self.low_stock_threshold


class ProductPrice(Base):
    """Selling price of a product under a specific price type."""

    __tablename__ = "product_prices"
    __table_args__ = (
        UniqueConstraint("product_id", "price_type_id", name="uq_product_price_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    price_type_id = Column(Integer, ForeignKey("price_types.id", ondelete="CASCADE"), nullable=False, index=True)
    selling_price = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="prices")
    price_type = relationship("PriceType", back_populates="product_prices")
