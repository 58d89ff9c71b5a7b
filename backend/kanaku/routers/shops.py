"""
API endpoints for shops and the shop dashboard.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import get_current_user, get_shop_access, require_admin
from kanaku.models.enums import UserRole
from kanaku.models.user import User
from kanaku.schemas import (
    DashboardStats, ShopAccessResponse, ShopCreate, ShopResponse, ShopUpdate,
)
from kanaku.services.analytics_service import analytics_service
from kanaku.services.shop_service import ShopAccess, shop_service

router = APIRouter()


def _with_access(shop, role, user: User) -> ShopAccessResponse:
    data = ShopResponse.model_validate(shop).model_dump()
    return ShopAccessResponse(**data, role=role, is_owner=shop.owner_id == user.id)


@router.get("", response_model=List[ShopAccessResponse])
async def list_shops(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Shops the user owns or works at, with their role in each."""
    return [
        _with_access(shop, role, current_user)
        for shop, role in shop_service.list_user_shops(db, current_user)
    ]


@router.post("", response_model=ShopAccessResponse, status_code=status.HTTP_201_CREATED)
async def create_shop(
    shop_in: ShopCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create a shop; the creator becomes its owner."""
    shop = shop_service.create_shop(db, current_user, shop_in)
    return _with_access(shop, UserRole.ADMIN, current_user)


@router.get("/{shop_id}", response_model=ShopAccessResponse)
async def get_shop(access: ShopAccess = Depends(get_shop_access)):
    return _with_access(access.shop, access.role, access.user)


@router.put("/{shop_id}", response_model=ShopAccessResponse)
async def update_shop(
    shop_in: ShopUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Update shop settings."""
    shop = shop_service.update_shop(db, access.shop, shop_in)
    return _with_access(shop, access.role, access.user)


@router.get("/{shop_id}/dashboard", response_model=DashboardStats)
async def get_dashboard(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(get_shop_access),
):
    return analytics_service.get_dashboard(db, access.shop_id)
