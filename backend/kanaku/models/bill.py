"""
Bill and BillItem database models.
"""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, Index, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from kanaku.database import Base
from kanaku.models.enums import PaymentMethod, PaymentStatus, enum_values
from kanaku.models.types import ExactDecimal


class Bill(Base):
    """A completed sale. Totals are stored as computed at checkout."""

    __tablename__ = "bills"
    __table_args__ = (
        UniqueConstraint("shop_id", "bill_number", name="uq_bill_shop_number"),
        Index("idx_bill_shop_created", "shop_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    bill_number = Column(String, nullable=False)
    customer_name = Column(String, nullable=True)
    customer_phone = Column(String, nullable=True)
    customer_address = Column(String, nullable=True)
    price_type_id = Column(Integer, ForeignKey("price_types.id", ondelete="SET NULL"), nullable=True)
    subtotal = Column(ExactDecimal(), nullable=False, default=0)
    discount_amount = Column(ExactDecimal(), nullable=False, default=0)
    discount_percent = Column(ExactDecimal(), nullable=False, default=0)
    taxable_amount = Column(ExactDecimal(), nullable=False, default=0)
    gst_amount = Column(ExactDecimal(), nullable=False, default=0)
    total = Column(ExactDecimal(), nullable=False, default=0)
    payment_method = Column(
        Enum(PaymentMethod, values_callable=enum_values), nullable=False, default=PaymentMethod.CASH
    )
    payment_status = Column(
        Enum(PaymentStatus, values_callable=enum_values), nullable=False, default=PaymentStatus.PAID
    )
    notes = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    shop = relationship("Shop", back_populates="bills")
    price_type = relationship("PriceType")
    created_by_user = relationship("User")
    items = relationship(
        "BillItem", back_populates="bill", cascade="all, delete-orphan", order_by="BillItem.id"
    )


class BillItem(Base):
    """Bill line. Product details are copied so the bill survives catalog edits."""

    __tablename__ = "bill_items"

    id = Column(Integer, primary_key=True, index=True)
    bill_id = Column(Integer, ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    product_name = Column(String, nullable=False)
    product_name_tamil = Column(String, nullable=True)
    sku = Column(String, nullable=True)
    hsn_code = Column(String, nullable=True)
    quantity = Column(ExactDecimal(), nullable=False)
    unit = Column(String, nullable=False, default="pcs")
    unit_price = Column(ExactDecimal(), nullable=False)
    discount_amount = Column(ExactDecimal(), nullable=False, default=0)
    taxable_amount = Column(ExactDecimal(), nullable=False, default=0)
    gst_percent = Column(Numeric(5, 2), nullable=False, default=0)
    gst_amount = Column(ExactDecimal(), nullable=False, default=0)
    total = Column(ExactDecimal(), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    bill = relationship("Bill", back_populates="items")
    product = relationship("Product")
