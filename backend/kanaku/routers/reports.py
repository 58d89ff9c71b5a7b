"""
API endpoints for sales reports.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access
from kanaku.services.analytics_service import analytics_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("/daily")
async def get_daily_trend(
    days: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Get daily sales trend."""
    return analytics_service.get_daily_trend(db, access.shop_id, days)


@router.get("/categories")
async def get_category_sales(
    days: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Get sales breakdown by category."""
    return analytics_service.get_sales_by_category(db, access.shop_id, days)
