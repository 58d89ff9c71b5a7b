"""
Billing Service - checkout, bill history and receipts.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from kanaku.models.bill import Bill, BillItem
from kanaku.models.enums import ReferenceType, StockMovementType
from kanaku.models.price_type import PriceType
from kanaku.models.product import Product
from kanaku.models.shop import Shop
from kanaku.schemas import BillCreate
from kanaku.services.billing import Cart
from kanaku.services.catalog_service import catalog_service
from kanaku.services.inventory_service import inventory_service
from kanaku.services.lookup import get_shop_row, like_pattern
from kanaku.services.numbering import generate_bill_number
from kanaku.services.product_service import product_service
from kanaku.services.receipt import render_receipt
from kanaku.services.units import is_valid_quantity

logger = logging.getLogger(__name__)

BILL_PERIODS = ("today", "week", "month", "all")


def period_start(period: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Start of a bill-history period; None means no lower bound."""
    now = now or datetime.now()
    if period == "today":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "week":
        return now - timedelta(days=7)
    if period == "month":
        return now - timedelta(days=30)
    if period == "all":
        return None
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Unknown period: {period}",
    )


class BillingService:
    def _build_cart(self, db: Session, shop_id: int, data: BillCreate,
                    price_type_id: Optional[int]) -> Cart:
        cart = Cart(discount_percent=data.discount_percent)
        for line in data.items:
            product = get_shop_row(db, Product, shop_id, line.product_id, "Product")
            if not product.is_active:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{product.name} is not available for sale",
                )
            if not is_valid_quantity(product.unit, line.quantity):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{product.name} is sold in whole {product.unit} only",
                )
            unit_price = line.unit_price
            if unit_price is None:
                unit_price = product_service.resolve_unit_price(product, price_type_id)
            cart.add_item(product, line.quantity, unit_price)
        return cart

    def create_bill(self, db: Session, shop_id: int, data: BillCreate, user_id: int) -> Bill:
        """
        Checkout: price the cart, store the bill with its items and take
        tracked products out of stock, all in one transaction.
        """
        if not data.items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cart is empty",
            )

        if data.price_type_id is not None:
            price_type_id = get_shop_row(
                db, PriceType, shop_id, data.price_type_id, "Price type"
            ).id
        else:
            default = catalog_service.get_default_price_type(db, shop_id)
            price_type_id = default.id if default else None

        cart = self._build_cart(db, shop_id, data, price_type_id)
        totals = cart.totals()

        try:
            bill = Bill(
                shop_id=shop_id,
                bill_number=generate_bill_number(db, shop_id),
                customer_name=data.customer_name,
                customer_phone=data.customer_phone,
                customer_address=data.customer_address,
                price_type_id=price_type_id,
                subtotal=totals.subtotal,
                discount_amount=totals.discount_amount,
                discount_percent=totals.discount_percent,
                taxable_amount=totals.taxable_amount,
                gst_amount=totals.gst_amount,
                total=totals.total,
                payment_method=data.payment_method,
                payment_status=data.payment_status,
                notes=data.notes,
                created_by=user_id,
            )
            for cart_item, line in zip(cart.items, totals.lines):
                product = cart_item.product
                bill.items.append(BillItem(
                    product_id=product.id,
                    product_name=product.name,
                    product_name_tamil=product.name_tamil,
                    sku=product.sku,
                    hsn_code=product.hsn_code,
                    quantity=cart_item.quantity,
                    unit=product.unit,
                    unit_price=cart_item.unit_price,
                    discount_amount=line.discount_amount,
                    taxable_amount=line.taxable_amount,
                    gst_percent=cart_item.gst_percent,
                    gst_amount=line.gst_amount,
                    total=line.total,
                ))
            db.add(bill)
            db.flush()

            for cart_item in cart.items:
                if cart_item.product.track_inventory:
                    inventory_service.record_movement(
                        db,
                        cart_item.product,
                        StockMovementType.SALE,
                        -cart_item.quantity,
                        user_id,
                        reference_type=ReferenceType.BILL,
                        reference_id=bill.id,
                        notes=f"Sold on {bill.bill_number}",
                    )
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"Checkout failed for shop {shop_id}")
            raise

        db.refresh(bill)
        logger.info(f"Shop {shop_id}: created {bill.bill_number} total {totals.total:.2f}")
        return bill

    def list_bills(
        self,
        db: Session,
        shop_id: int,
        period: str = "all",
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Bill]:
        query = (
            db.query(Bill)
            .options(selectinload(Bill.items))
            .filter(Bill.shop_id == shop_id)
        )
        start = period_start(period)
        if start is not None:
            query = query.filter(Bill.created_at >= start)
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.filter(or_(
                Bill.bill_number.ilike(pattern),
                Bill.customer_name.ilike(pattern),
                Bill.customer_phone.ilike(pattern),
            ))
        return (
            query.order_by(Bill.created_at.desc(), Bill.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_bill(self, db: Session, shop_id: int, bill_id: int) -> Bill:
        return get_shop_row(db, Bill, shop_id, bill_id, "Bill")

    def get_receipt(self, db: Session, shop: Shop, bill_id: int,
                    width: Optional[int] = None) -> str:
        bill = self.get_bill(db, shop.id, bill_id)
        return render_receipt(bill, shop, width=width)


billing_service = BillingService()
