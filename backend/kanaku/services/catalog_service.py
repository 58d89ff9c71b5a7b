"""
Catalog Service - brands, price types and suppliers.
"""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from kanaku.models.brand import Brand
from kanaku.models.price_type import PriceType
from kanaku.models.supplier import Supplier
from kanaku.schemas import BrandCreate, PriceTypeCreate, SupplierCreate
from kanaku.services.lookup import get_shop_row, like_pattern

logger = logging.getLogger(__name__)


class CatalogService:
    # --- Brands ---
    def list_brands(self, db: Session, shop_id: int) -> List[Brand]:
        return db.query(Brand).filter(Brand.shop_id == shop_id).order_by(Brand.name).all()

    def create_brand(self, db: Session, shop_id: int, data: BrandCreate) -> Brand:
        brand = Brand(shop_id=shop_id, **data.model_dump())
        db.add(brand)
        db.commit()
        db.refresh(brand)
        return brand

    def update_brand(self, db: Session, shop_id: int, brand_id: int, data: BrandCreate) -> Brand:
        brand = get_shop_row(db, Brand, shop_id, brand_id, "Brand")
        for key, value in data.model_dump().items():
            setattr(brand, key, value)
        db.commit()
        db.refresh(brand)
        return brand

    def delete_brand(self, db: Session, shop_id: int, brand_id: int) -> None:
        brand = get_shop_row(db, Brand, shop_id, brand_id, "Brand")
        db.delete(brand)
        db.commit()

    # --- Price types ---
    def list_price_types(self, db: Session, shop_id: int) -> List[PriceType]:
        return (
            db.query(PriceType)
            .filter(PriceType.shop_id == shop_id)
            .order_by(PriceType.is_default.desc(), PriceType.name)
            .all()
        )

    def get_default_price_type(self, db: Session, shop_id: int) -> Optional[PriceType]:
        return (
            db.query(PriceType)
            .filter(PriceType.shop_id == shop_id, PriceType.is_default.is_(True))
            .first()
        )

    def _clear_default(self, db: Session, shop_id: int, keep_id: Optional[int] = None) -> None:
        query = db.query(PriceType).filter(
            PriceType.shop_id == shop_id, PriceType.is_default.is_(True)
        )
        if keep_id is not None:
            query = query.filter(PriceType.id != keep_id)
        for price_type in query.all():
            price_type.is_default = False

    def create_price_type(self, db: Session, shop_id: int, data: PriceTypeCreate) -> PriceType:
        if data.is_default:
            self._clear_default(db, shop_id)
        price_type = PriceType(shop_id=shop_id, **data.model_dump())
        db.add(price_type)
        db.commit()
        db.refresh(price_type)
        return price_type

    def update_price_type(self, db: Session, shop_id: int, price_type_id: int,
                          data: PriceTypeCreate) -> PriceType:
        price_type = get_shop_row(db, PriceType, shop_id, price_type_id, "Price type")
        if price_type.is_default and not data.is_default:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Set another price type as default instead",
            )
        if data.is_default:
            self._clear_default(db, shop_id, keep_id=price_type.id)
        for key, value in data.model_dump().items():
            setattr(price_type, key, value)
        db.commit()
        db.refresh(price_type)
        return price_type

    def set_default_price_type(self, db: Session, shop_id: int, price_type_id: int) -> PriceType:
        price_type = get_shop_row(db, PriceType, shop_id, price_type_id, "Price type")
        self._clear_default(db, shop_id, keep_id=price_type.id)
        price_type.is_default = True
        db.commit()
        db.refresh(price_type)
        logger.info(f"Shop {shop_id}: default price type is now {price_type.name}")
        return price_type

    def delete_price_type(self, db: Session, shop_id: int, price_type_id: int) -> None:
        price_type = get_shop_row(db, PriceType, shop_id, price_type_id, "Price type")
        if price_type.is_default:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete the default price type",
            )
        db.delete(price_type)
        db.commit()

    # --- Suppliers ---
    def list_suppliers(self, db: Session, shop_id: int, search: Optional[str] = None) -> List[Supplier]:
        query = db.query(Supplier).filter(Supplier.shop_id == shop_id)
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.filter(or_(
                Supplier.name.ilike(pattern),
                Supplier.contact_person.ilike(pattern),
                Supplier.phone.ilike(pattern),
            ))
        return query.order_by(Supplier.name).all()

    def get_supplier(self, db: Session, shop_id: int, supplier_id: int) -> Supplier:
        return get_shop_row(db, Supplier, shop_id, supplier_id, "Supplier")

    def create_supplier(self, db: Session, shop_id: int, data: SupplierCreate) -> Supplier:
        supplier = Supplier(shop_id=shop_id, **data.model_dump())
        db.add(supplier)
        db.commit()
        db.refresh(supplier)
        return supplier

    def update_supplier(self, db: Session, shop_id: int, supplier_id: int,
                        data: SupplierCreate) -> Supplier:
        supplier = self.get_supplier(db, shop_id, supplier_id)
        for key, value in data.model_dump().items():
            setattr(supplier, key, value)
        db.commit()
        db.refresh(supplier)
        return supplier

    def delete_supplier(self, db: Session, shop_id: int, supplier_id: int) -> None:
        supplier = self.get_supplier(db, shop_id, supplier_id)
        if supplier.purchase_orders:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Supplier has purchase orders and cannot be deleted",
            )
        db.delete(supplier)
        db.commit()


catalog_service = CatalogService()
