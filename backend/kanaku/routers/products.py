"""
API endpoints for product management.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access
from kanaku.schemas import ProductActiveUpdate, ProductCreate, ProductResponse, ProductUpdate
from kanaku.services.product_service import product_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    search: Optional[str] = None,
    category_id: Optional[int] = None,
    brand_id: Optional[int] = None,
    is_active: Optional[bool] = None,
    skip: int = 0,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """List products with optional search and filtering."""
    return product_service.list_products(
        db,
        access.shop_id,
        search=search,
        category_id=category_id,
        brand_id=brand_id,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


@router.get("/barcode/{barcode}", response_model=ProductResponse)
async def get_product_by_barcode(
    barcode: str,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Exact barcode lookup for the scanner at the billing counter."""
    return product_service.get_by_barcode(db, access.shop_id, barcode)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Create a new product."""
    return product_service.create_product(db, access.shop_id, product, access.user.id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return product_service.get_product(db, access.shop_id, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product: ProductUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Update an existing product. The submitted prices replace the stored ones."""
    return product_service.update_product(
        db, access.shop_id, product_id, product, access.user.id
    )


@router.patch("/{product_id}/active", response_model=ProductResponse)
async def set_product_active(
    product_id: int,
    update: ProductActiveUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return product_service.set_active(db, access.shop_id, product_id, update.is_active)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    product_service.delete_product(db, access.shop_id, product_id)
