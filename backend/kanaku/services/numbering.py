"""
Per-shop document numbers for bills and purchase orders.

Format: <PREFIX>-<YYYYMM>-<NNNN>, the sequence restarting every month.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from kanaku.config import settings
from kanaku.models.bill import Bill
from kanaku.models.purchase_order import PurchaseOrder


def _next_number(db: Session, column, shop_column, shop_id: int, prefix: str,
                 now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    period_prefix = f"{prefix}-{now.strftime('%Y%m')}-"
    existing = (
        db.query(column)
        .filter(shop_column == shop_id, column.like(f"{period_prefix}%"))
        .all()
    )
    last = 0
    for (number,) in existing:
        suffix = number[len(period_prefix):]
        if suffix.isdigit():
            last = max(last, int(suffix))
    return f"{period_prefix}{last + 1:04d}"


def generate_bill_number(db: Session, shop_id: int, now: Optional[datetime] = None) -> str:
    return _next_number(
        db, Bill.bill_number, Bill.shop_id, shop_id, settings.BILL_NUMBER_PREFIX, now
    )


def generate_po_number(db: Session, shop_id: int, now: Optional[datetime] = None) -> str:
    return _next_number(
        db, PurchaseOrder.po_number, PurchaseOrder.shop_id, shop_id, settings.PO_NUMBER_PREFIX, now
    )
