"""
Shops and per-shop access resolution.

Access rules: the owner is always an admin; other users need an active
employee row. Everything shop-scoped goes through resolve_access().
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from kanaku.config import settings
from kanaku.models.employee import ShopEmployee
from kanaku.models.enums import EmployeeStatus, UserRole
from kanaku.models.price_type import PriceType
from kanaku.models.shop import Shop
from kanaku.models.user import User
from kanaku.schemas import ShopCreate, ShopUpdate

logger = logging.getLogger(__name__)


@dataclass
class ShopAccess:
    shop: Shop
    user: User
    role: UserRole

    @property
    def shop_id(self) -> int:
        return self.shop.id

    @property
    def is_owner(self) -> bool:
        return self.shop.owner_id == self.user.id

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class ShopService:
    def resolve_access(self, db: Session, shop_id: int, user: User) -> ShopAccess:
        shop = db.query(Shop).filter(Shop.id == shop_id).first()
        if shop is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shop not found")

        if shop.owner_id == user.id:
            return ShopAccess(shop=shop, user=user, role=UserRole.ADMIN)

        employee = (
            db.query(ShopEmployee)
            .filter(
                ShopEmployee.shop_id == shop_id,
                ShopEmployee.user_id == user.id,
                ShopEmployee.status == EmployeeStatus.ACTIVE,
            )
            .first()
        )
        if employee is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have access to this shop",
            )
        return ShopAccess(shop=shop, user=user, role=employee.role)

    def create_shop(self, db: Session, owner: User, data: ShopCreate) -> Shop:
        """Create a shop together with its default price type."""
        shop = Shop(owner_id=owner.id, **data.model_dump())
        db.add(shop)
        db.flush()

        db.add(PriceType(
            shop_id=shop.id,
            name=settings.DEFAULT_PRICE_TYPE_NAME,
            description=settings.DEFAULT_PRICE_TYPE_DESCRIPTION,
            is_default=True,
        ))
        db.commit()
        db.refresh(shop)
        logger.info(f"User {owner.id} created shop {shop.id} ({shop.name})")
        return shop

    def list_user_shops(self, db: Session, user: User) -> List[Tuple[Shop, UserRole]]:
        """Owned shops first (newest first), then shops the user works at."""
        owned = (
            db.query(Shop)
            .filter(Shop.owner_id == user.id)
            .order_by(Shop.created_at.desc(), Shop.id.desc())
            .all()
        )
        result = [(shop, UserRole.ADMIN) for shop in owned]

        memberships = (
            db.query(ShopEmployee)
            .filter(
                ShopEmployee.user_id == user.id,
                ShopEmployee.status == EmployeeStatus.ACTIVE,
            )
            .all()
        )
        owned_ids = {shop.id for shop in owned}
        for membership in memberships:
            if membership.shop_id not in owned_ids:
                result.append((membership.shop, membership.role))
        return result

    def update_shop(self, db: Session, shop: Shop, data: ShopUpdate) -> Shop:
        for key, value in data.model_dump().items():
            setattr(shop, key, value)
        db.commit()
        db.refresh(shop)
        return shop


shop_service = ShopService()
