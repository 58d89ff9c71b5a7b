"""
Enumerations shared by the models and the API schemas.
"""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CASHIER = "cashier"


class EmployeeStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    CREDIT = "credit"


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PENDING = "pending"
    PARTIAL = "partial"


class StockMovementType(str, enum.Enum):
    PURCHASE = "purchase"
    SALE = "sale"
    ADJUSTMENT = "adjustment"
    RETURN = "return"


class ReferenceType(str, enum.Enum):
    BILL = "bill"
    PURCHASE_ORDER = "purchase_order"
    ADJUSTMENT = "adjustment"


class PurchaseOrderStatus(str, enum.Enum):
    DRAFT = "draft"
    ORDERED = "ordered"
    PARTIAL = "partial"
    RECEIVED = "received"
    CANCELLED = "cancelled"


def enum_values(enum_cls):
    """Store enum values (not member names) in the database."""
    return [member.value for member in enum_cls]
