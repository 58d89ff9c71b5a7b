"""
API endpoints for price types (Retail, Wholesale, ...).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access, require_admin
from kanaku.schemas import PriceTypeCreate, PriceTypeResponse
from kanaku.services.catalog_service import catalog_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[PriceTypeResponse])
async def list_price_types(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """The default price type comes first."""
    return catalog_service.list_price_types(db, access.shop_id)


@router.post("", response_model=PriceTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_price_type(
    price_type: PriceTypeCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.create_price_type(db, access.shop_id, price_type)


@router.put("/{price_type_id}", response_model=PriceTypeResponse)
async def update_price_type(
    price_type_id: int,
    price_type: PriceTypeCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.update_price_type(db, access.shop_id, price_type_id, price_type)


@router.post("/{price_type_id}/default", response_model=PriceTypeResponse)
async def set_default_price_type(
    price_type_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Make this the shop's default price type."""
    return catalog_service.set_default_price_type(db, access.shop_id, price_type_id)


@router.delete("/{price_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_price_type(
    price_type_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    catalog_service.delete_price_type(db, access.shop_id, price_type_id)
