"""
Purchase Order Service - ordering from suppliers and receiving stock.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from kanaku.models.enums import PurchaseOrderStatus, ReferenceType, StockMovementType
from kanaku.models.product import Product
from kanaku.models.purchase_order import PurchaseOrder, PurchaseOrderItem
from kanaku.models.supplier import Supplier
from kanaku.schemas import PurchaseOrderCreate, PurchaseOrderReceive
from kanaku.services.billing import ZERO, to_decimal
from kanaku.services.inventory_service import inventory_service
from kanaku.services.lookup import get_shop_row, like_pattern
from kanaku.services.numbering import generate_po_number

logger = logging.getLogger(__name__)

# Allowed manual status changes; receiving is a separate operation
STATUS_TRANSITIONS = {
    PurchaseOrderStatus.DRAFT: {PurchaseOrderStatus.ORDERED, PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.ORDERED: {PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.PARTIAL: {PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.RECEIVED: set(),
    PurchaseOrderStatus.CANCELLED: set(),
}


class PurchaseOrderService:
    def list_purchase_orders(
        self,
        db: Session,
        shop_id: int,
        search: Optional[str] = None,
        status_filter: Optional[PurchaseOrderStatus] = None,
    ) -> List[PurchaseOrder]:
        query = (
            db.query(PurchaseOrder)
            .join(Supplier, PurchaseOrder.supplier_id == Supplier.id)
            .filter(PurchaseOrder.shop_id == shop_id)
        )
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.filter(or_(
                PurchaseOrder.po_number.ilike(pattern),
                Supplier.name.ilike(pattern),
            ))
        if status_filter is not None:
            query = query.filter(PurchaseOrder.status == status_filter)
        return query.order_by(PurchaseOrder.created_at.desc(), PurchaseOrder.id.desc()).all()

    def get_purchase_order(self, db: Session, shop_id: int, po_id: int) -> PurchaseOrder:
        return get_shop_row(db, PurchaseOrder, shop_id, po_id, "Purchase order")

    def create_purchase_order(
        self, db: Session, shop_id: int, data: PurchaseOrderCreate, user_id: int
    ) -> PurchaseOrder:
        get_shop_row(db, Supplier, shop_id, data.supplier_id, "Supplier")
        if not data.items:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Please add at least one item",
            )

        items = []
        subtotal = ZERO
        for item_data in data.items:
            product = get_shop_row(db, Product, shop_id, item_data.product_id, "Product")
            quantity = to_decimal(item_data.quantity)
            unit_cost = to_decimal(
                item_data.unit_cost if item_data.unit_cost is not None else product.cost_price
            )
            total = quantity * unit_cost
            subtotal += total
            items.append(PurchaseOrderItem(
                product_id=product.id,
                quantity_ordered=quantity,
                quantity_received=ZERO,
                unit_cost=unit_cost,
                total=total,
            ))

        try:
            order = PurchaseOrder(
                shop_id=shop_id,
                supplier_id=data.supplier_id,
                po_number=generate_po_number(db, shop_id),
                status=PurchaseOrderStatus.DRAFT,
                expected_date=data.expected_date,
                subtotal=subtotal,
                tax_amount=ZERO,
                total_amount=subtotal,
                notes=data.notes,
                created_by=user_id,
                items=items,
            )
            db.add(order)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(order)
        logger.info(f"Shop {shop_id}: created {order.po_number} with {len(items)} item(s)")
        return order

    def update_status(
        self, db: Session, shop_id: int, po_id: int, new_status: PurchaseOrderStatus
    ) -> PurchaseOrder:
        order = self.get_purchase_order(db, shop_id, po_id)
        if new_status not in STATUS_TRANSITIONS[order.status]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot change status from {order.status.value} to {new_status.value}",
            )
        order.status = new_status
        db.commit()
        db.refresh(order)
        return order

    def receive_purchase_order(
        self, db: Session, shop_id: int, po_id: int, data: PurchaseOrderReceive, user_id: int
    ) -> PurchaseOrder:
        """
        Receive goods against a PO.

        Without an explicit item list everything outstanding is received.
        Stock goes up for every received line of a tracked product and the
        PO ends up either received (nothing pending) or partial.
        """
        order = self.get_purchase_order(db, shop_id, po_id)
        if order.status in (PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELLED):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot receive a {order.status.value} purchase order",
            )

        items_by_id = {item.id: item for item in order.items}
        if data.items is None:
            to_receive: Dict[int, Decimal] = {
                item.id: to_decimal(item.quantity_pending)
                for item in order.items
                if to_decimal(item.quantity_pending) > 0
            }
        else:
            to_receive = {}
            for line in data.items:
                item = items_by_id.get(line.item_id)
                if item is None:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail="Purchase order item not found",
                    )
                quantity = to_decimal(to_receive.get(item.id, ZERO)) + to_decimal(line.quantity)
                if quantity > to_decimal(item.quantity_pending):
                    raise HTTPException(
                        status_code=status.HTTP_400_BAD_REQUEST,
                        detail=f"Cannot receive more than ordered for {item.product_name}",
                    )
                to_receive[item.id] = quantity

        if not to_receive:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Nothing left to receive",
            )

        try:
            for item_id, quantity in to_receive.items():
                item = items_by_id[item_id]
                quantity = to_decimal(quantity)
                item.quantity_received = to_decimal(item.quantity_received) + quantity
                if not item.product.track_inventory:
                    continue
                inventory_service.record_movement(
                    db,
                    item.product,
                    StockMovementType.PURCHASE,
                    quantity,
                    user_id,
                    reference_type=ReferenceType.PURCHASE_ORDER,
                    reference_id=order.id,
                    notes=data.notes or f"Received against {order.po_number}",
                )

            fully_received = all(
                to_decimal(item.quantity_received) >= to_decimal(item.quantity_ordered)
                for item in order.items
            )
            if fully_received:
                order.status = PurchaseOrderStatus.RECEIVED
                order.received_date = datetime.now()
            else:
                order.status = PurchaseOrderStatus.PARTIAL
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(order)
        logger.info(f"Shop {shop_id}: received {order.po_number} ({order.status.value})")
        return order

    def delete_purchase_order(self, db: Session, shop_id: int, po_id: int) -> None:
        order = self.get_purchase_order(db, shop_id, po_id)
        if order.status in (PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.PARTIAL):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Received purchase orders cannot be deleted",
            )
        db.delete(order)
        db.commit()


purchase_order_service = PurchaseOrderService()
