"""
Database models for Kanaku360.

All SQLAlchemy models are imported here for Alembic migrations.
"""

from kanaku.models.user import User
from kanaku.models.shop import Shop
from kanaku.models.employee import ShopEmployee
from kanaku.models.category import Category
from kanaku.models.brand import Brand
from kanaku.models.price_type import PriceType
from kanaku.models.product import Product, ProductPrice
from kanaku.models.bill import Bill, BillItem
from kanaku.models.supplier import Supplier
from kanaku.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from kanaku.models.stock_movement import StockMovement

__all__ = [
    "User",
    "Shop",
    "ShopEmployee",
    "Category",
    "Brand",
    "PriceType",
    "Product",
    "ProductPrice",
    "Bill",
    "BillItem",
    "Supplier",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "StockMovement",
]
