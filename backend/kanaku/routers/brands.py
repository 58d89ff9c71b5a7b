"""
API endpoints for brands.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access, require_admin
from kanaku.schemas import BrandCreate, BrandResponse
from kanaku.services.catalog_service import catalog_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[BrandResponse])
async def list_brands(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return catalog_service.list_brands(db, access.shop_id)


@router.post("", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
async def create_brand(
    brand: BrandCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.create_brand(db, access.shop_id, brand)


@router.put("/{brand_id}", response_model=BrandResponse)
async def update_brand(
    brand_id: int,
    brand: BrandCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.update_brand(db, access.shop_id, brand_id, brand)


@router.delete("/{brand_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_brand(
    brand_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    catalog_service.delete_brand(db, access.shop_id, brand_id)
