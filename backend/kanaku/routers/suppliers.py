"""
API endpoints for suppliers.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access, require_admin
from kanaku.schemas import SupplierCreate, SupplierResponse
from kanaku.services.catalog_service import catalog_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[SupplierResponse])
async def list_suppliers(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """List suppliers, optionally searching name, contact person and phone."""
    return catalog_service.list_suppliers(db, access.shop_id, search)


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    supplier: SupplierCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.create_supplier(db, access.shop_id, supplier)


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return catalog_service.get_supplier(db, access.shop_id, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: int,
    supplier: SupplierCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return catalog_service.update_supplier(db, access.shop_id, supplier_id, supplier)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(
    supplier_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    catalog_service.delete_supplier(db, access.shop_id, supplier_id)
