"""
API endpoints for stock levels and movements.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access, require_admin
from kanaku.schemas import ProductResponse, StockAdjustment, StockMovementResponse
from kanaku.services.inventory_service import inventory_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_inventory(
    stock: str = "all",
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Tracked products; stock is one of all, low, out, ok."""
    return inventory_service.list_inventory(db, access.shop_id, stock, search)


@router.get("/movements", response_model=List[StockMovementResponse])
async def list_movements(
    product_id: Optional[int] = None,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Most recent stock movements, newest first."""
    return inventory_service.list_movements(db, access.shop_id, product_id)


@router.post("/adjust", response_model=StockMovementResponse, status_code=status.HTTP_201_CREATED)
async def adjust_stock(
    adjustment: StockAdjustment,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return inventory_service.adjust_stock(db, access.shop_id, adjustment, access.user.id)
