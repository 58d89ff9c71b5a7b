"""
StockMovement database model: the append-only stock ledger.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship

from kanaku.database import Base
from kanaku.models.enums import StockMovementType, ReferenceType, enum_values


class StockMovement(Base):
    """One change to a product's stock. quantity is signed."""

    __tablename__ = "stock_movements"
    __table_args__ = (
        Index("idx_movement_shop_created", "shop_id", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(StockMovementType, values_callable=enum_values), nullable=False)
    quantity = Column(Numeric(12, 3), nullable=False)
    quantity_before = Column(Numeric(12, 3), nullable=False)
    quantity_after = Column(Numeric(12, 3), nullable=False)
    reference_type = Column(Enum(ReferenceType, values_callable=enum_values), nullable=True)
    reference_id = Column(Integer, nullable=True)
    notes = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    # Relationships
    product = relationship("Product", back_populates="movements")
    created_by_user = relationship("User")

    @property
    def product_name(self):
        return self.product.name if self.product else None
