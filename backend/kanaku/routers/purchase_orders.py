"""
API endpoints for purchase orders.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import require_admin
from kanaku.models.enums import PurchaseOrderStatus
from kanaku.schemas import (
    PurchaseOrderCreate,
    PurchaseOrderReceive,
    PurchaseOrderResponse,
    PurchaseOrderStatusUpdate,
)
from kanaku.services.purchase_order_service import purchase_order_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[PurchaseOrderResponse])
async def list_purchase_orders(
    search: Optional[str] = None,
    status_filter: Optional[PurchaseOrderStatus] = None,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return purchase_order_service.list_purchase_orders(
        db, access.shop_id, search=search, status_filter=status_filter
    )


@router.post("", response_model=PurchaseOrderResponse, status_code=status.HTTP_201_CREATED)
async def create_purchase_order(
    order: PurchaseOrderCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Create a draft purchase order."""
    return purchase_order_service.create_purchase_order(
        db, access.shop_id, order, access.user.id
    )


@router.get("/{po_id}", response_model=PurchaseOrderResponse)
async def get_purchase_order(
    po_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return purchase_order_service.get_purchase_order(db, access.shop_id, po_id)


@router.put("/{po_id}/status", response_model=PurchaseOrderResponse)
async def update_purchase_order_status(
    po_id: int,
    update: PurchaseOrderStatusUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return purchase_order_service.update_status(db, access.shop_id, po_id, update.status)


@router.post("/{po_id}/receive", response_model=PurchaseOrderResponse)
async def receive_purchase_order(
    po_id: int,
    receive: PurchaseOrderReceive,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Receive stock; without items everything outstanding is received."""
    return purchase_order_service.receive_purchase_order(
        db, access.shop_id, po_id, receive, access.user.id
    )


@router.delete("/{po_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_purchase_order(
    po_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    purchase_order_service.delete_purchase_order(db, access.shop_id, po_id)
