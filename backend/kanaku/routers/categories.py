"""
API endpoints for product categories.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_shop_access, require_admin
from kanaku.schemas import CategoryCreate, CategoryResponse, CategoryTreeNode, CategoryUpdate
from kanaku.services.category_service import category_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """List all categories of the shop, flat."""
    return category_service.list_categories(db, access.shop_id)


@router.get("/tree", response_model=List[CategoryTreeNode])
async def get_category_tree(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    """Categories nested under their parents."""
    return category_service.get_tree(db, access.shop_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return category_service.create_category(db, access.shop_id, category)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return category_service.get_category(db, access.shop_id, category_id)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    category: CategoryUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return category_service.update_category(db, access.shop_id, category_id, category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Products in the category become uncategorized."""
    category_service.delete_category(db, access.shop_id, category_id)
