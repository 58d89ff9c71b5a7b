"""
Analytics Service for shop sales reports and the dashboard.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any, List
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from sqlalchemy import Numeric, cast, func, desc

from kanaku.models.bill import Bill, BillItem
from kanaku.models.category import Category
from kanaku.models.product import Product
from kanaku.services.billing import to_decimal

logger = logging.getLogger(__name__)

DASHBOARD_LOW_STOCK_LIMIT = 5
DASHBOARD_RECENT_BILLS = 5
CENT = Decimal("0.01")


def _sum(column):
    # bill amounts are stored as text
    return func.sum(cast(column, Numeric))


def _money(value) -> float:
    return float(to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


class AnalyticsService:
    def _sales_since(self, db: Session, shop_id: int, start: datetime):
        total, count = (
            db.query(_sum(Bill.total), func.count(Bill.id))
            .filter(Bill.shop_id == shop_id, Bill.created_at >= start)
            .one()
        )
        return _money(total), count

    def get_dashboard(self, db: Session, shop_id: int) -> Dict[str, Any]:
        """Today's and this month's sales, stock alerts and the latest bills."""
        now = datetime.now()
        today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        month_start = today_start.replace(day=1)

        today_sales, today_count = self._sales_since(db, shop_id, today_start)
        month_sales, month_count = self._sales_since(db, shop_id, month_start)

        # every product in the catalogue, active or not
        total_products = db.query(Product).filter(Product.shop_id == shop_id).count()

        low_stock_query = db.query(Product).filter(
            Product.shop_id == shop_id,
            Product.is_active.is_(True),
            Product.track_inventory.is_(True),
            Product.stock_quantity <= Product.low_stock_threshold,
        )
        low_stock_count = low_stock_query.count()
        low_stock_products = (
            low_stock_query.order_by(Product.stock_quantity)
            .limit(DASHBOARD_LOW_STOCK_LIMIT)
            .all()
        )

        recent_bills = (
            db.query(Bill)
            .filter(Bill.shop_id == shop_id)
            .order_by(Bill.created_at.desc(), Bill.id.desc())
            .limit(DASHBOARD_RECENT_BILLS)
            .all()
        )

        return {
            "today_sales": today_sales,
            "today_bill_count": today_count,
            "month_sales": month_sales,
            "month_bill_count": month_count,
            "low_stock_count": low_stock_count,
            "total_products": total_products,
            "low_stock_products": low_stock_products,
            "recent_bills": recent_bills,
        }

    def get_daily_trend(self, db: Session, shop_id: int, days: int = 30) -> List[Dict[str, Any]]:
        """Get daily sales trend for chart."""
        start_date = datetime.now() - timedelta(days=days)

        results = (
            db.query(
                func.strftime("%Y-%m-%d", Bill.created_at).label("day"),
                _sum(Bill.total).label("total"),
                func.count(Bill.id).label("count"),
            )
            .filter(Bill.shop_id == shop_id, Bill.created_at >= start_date)
            .group_by("day")
            .order_by("day")
            .all()
        )

        return [
            {"date": day, "amount": _money(total), "count": count}
            for day, total, count in results
        ]

    def get_sales_by_category(
        self, db: Session, shop_id: int, days: int = 30
    ) -> List[Dict[str, Any]]:
        """
        Get sales breakdown by category.

        Lines whose product is gone or uncategorized are reported as
        "Uncategorized".
        """
        start_date = datetime.now() - timedelta(days=days)

        results = (
            db.query(
                Category.name,
                _sum(BillItem.total).label("total"),
                _sum(BillItem.quantity).label("quantity"),
            )
            .select_from(BillItem)
            .join(Bill, BillItem.bill_id == Bill.id)
            .outerjoin(Product, BillItem.product_id == Product.id)
            .outerjoin(Category, Product.category_id == Category.id)
            .filter(Bill.shop_id == shop_id, Bill.created_at >= start_date)
            .group_by(Category.id, Category.name)
            .order_by(desc("total"))
            .all()
        )

        return [
            {
                "category": name or "Uncategorized",
                "amount": _money(total),
                "quantity": float(quantity or 0),
            }
            for name, total, quantity in results
        ]


analytics_service = AnalyticsService()
