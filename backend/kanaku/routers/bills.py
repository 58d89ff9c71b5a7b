"""
API endpoints for billing: checkout, bill history and receipts.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kanaku.config import settings
from kanaku.database import get_db
from kanaku.dependencies import get_shop_access
from kanaku.schemas import BillCreate, BillResponse, ReceiptResponse
from kanaku.services.billing_service import billing_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(
    bill: BillCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Checkout the cart as a new bill."""
    return billing_service.create_bill(db, access.shop_id, bill, access.user.id)


@router.get("", response_model=List[BillResponse])
async def list_bills(
    period: str = "all",
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Bills newest first; period is one of today, week, month, all."""
    return billing_service.list_bills(
        db, access.shop_id, period=period, search=search, skip=skip, limit=limit
    )


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(
    bill_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return billing_service.get_bill(db, access.shop_id, bill_id)


@router.get("/{bill_id}/receipt", response_model=ReceiptResponse)
async def get_bill_receipt(
    bill_id: int,
    width: Optional[int] = Query(None, ge=32, le=64),
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Printable text receipt for thermal printers."""
    width = width or settings.RECEIPT_WIDTH
    bill = billing_service.get_bill(db, access.shop_id, bill_id)
    return {
        "bill_id": bill.id,
        "bill_number": bill.bill_number,
        "width": width,
        "text": billing_service.get_receipt(db, access.shop, bill_id, width=width),
    }
