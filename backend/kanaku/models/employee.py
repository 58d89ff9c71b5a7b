"""
ShopEmployee database model.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from kanaku.database import Base
from kanaku.models.enums import UserRole, EmployeeStatus, enum_values


class ShopEmployee(Base):
    """Membership of a user (or a pending invitee) in a shop."""

    __tablename__ = "shop_employees"
    __table_args__ = (
        UniqueConstraint("shop_id", "invited_email", name="uq_employee_shop_email"),
    )

    id = Column(Integer, primary_key=True, index=True)
    shop_id = Column(Integer, ForeignKey("shops.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    invited_email = Column(String, nullable=False, index=True)
    role = Column(Enum(UserRole, values_callable=enum_values), nullable=False, default=UserRole.CASHIER)
    status = Column(
        Enum(EmployeeStatus, values_callable=enum_values),
        nullable=False,
        default=EmployeeStatus.PENDING,
    )
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Relationships
    shop = relationship("Shop", back_populates="employees")
    user = relationship("User", back_populates="memberships")
