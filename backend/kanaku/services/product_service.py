"""
Product Service - product catalog with per-price-type prices.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from kanaku.config import settings
from kanaku.models.brand import Brand
from kanaku.models.category import Category
from kanaku.models.enums import ReferenceType, StockMovementType
from kanaku.models.price_type import PriceType
from kanaku.models.product import Product, ProductPrice
from kanaku.models.purchase_order import PurchaseOrderItem
from kanaku.schemas import ProductCreate, ProductUpdate
from kanaku.services.billing import ZERO, to_decimal
from kanaku.services.inventory_service import inventory_service
from kanaku.services.lookup import get_shop_row, like_pattern

logger = logging.getLogger(__name__)


class ProductService:
    def list_products(
        self,
        db: Session,
        shop_id: int,
        search: Optional[str] = None,
        category_id: Optional[int] = None,
        brand_id: Optional[int] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Product]:
        query = (
            db.query(Product)
            .options(selectinload(Product.prices))
            .filter(Product.shop_id == shop_id)
        )
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.filter(or_(
                Product.name.ilike(pattern),
                Product.name_tamil.ilike(pattern),
                Product.sku.ilike(pattern),
                Product.barcode.ilike(pattern),
            ))
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if brand_id is not None:
            query = query.filter(Product.brand_id == brand_id)
        if is_active is not None:
            query = query.filter(Product.is_active.is_(is_active))
        return query.order_by(Product.name).offset(skip).limit(limit).all()

    def get_product(self, db: Session, shop_id: int, product_id: int) -> Product:
        return get_shop_row(db, Product, shop_id, product_id, "Product")

    def get_by_barcode(self, db: Session, shop_id: int, barcode: str) -> Product:
        product = (
            db.query(Product)
            .filter(Product.shop_id == shop_id, Product.barcode == barcode.strip())
            .first()
        )
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No product with this barcode",
            )
        return product

    def _check_references(self, db: Session, shop_id: int, data) -> None:
        if data.category_id is not None:
            get_shop_row(db, Category, shop_id, data.category_id, "Category")
        if data.brand_id is not None:
            get_shop_row(db, Brand, shop_id, data.brand_id, "Brand")
        for price in data.prices:
            get_shop_row(db, PriceType, shop_id, price.price_type_id, "Price type")

    def _product_fields(self, data) -> dict:
        fields = data.model_dump(exclude={"prices"})
        fields["unit"] = fields["unit"].strip().lower()
        if fields["track_inventory"]:
            if fields["low_stock_threshold"] is None:
                fields["low_stock_threshold"] = settings.DEFAULT_LOW_STOCK_THRESHOLD
        else:
            fields["stock_quantity"] = 0
            fields["low_stock_threshold"] = 0
        for key in ("mrp", "cost_price", "default_selling_price", "gst_percent",
                    "stock_quantity", "low_stock_threshold"):
            fields[key] = to_decimal(fields[key])
        if fields["stock_quantity"] < ZERO:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Stock quantity cannot be negative",
            )
        return fields

    def _replace_prices(self, product: Product, prices) -> None:
        """The submitted list replaces the stored one; zero prices are dropped."""
        kept = {}
        for price in prices:
            value = to_decimal(price.selling_price)
            if value > 0:
                kept[price.price_type_id] = value

        # Rows are updated in place so the (product, price type) unique key never clashes
        existing = {row.price_type_id: row for row in product.prices}
        for price_type_id, row in existing.items():
            if price_type_id not in kept:
                product.prices.remove(row)
        for price_type_id, value in kept.items():
            if price_type_id in existing:
                existing[price_type_id].selling_price = value
            else:
                product.prices.append(
                    ProductPrice(price_type_id=price_type_id, selling_price=value)
                )

    def create_product(self, db: Session, shop_id: int, data: ProductCreate, user_id: int) -> Product:
        self._check_references(db, shop_id, data)
        fields = self._product_fields(data)
        opening_stock = fields.pop("stock_quantity")

        try:
            product = Product(shop_id=shop_id, stock_quantity=0, **fields)
            self._replace_prices(product, data.prices)
            db.add(product)
            db.flush()

            if product.track_inventory and opening_stock > 0:
                inventory_service.record_movement(
                    db,
                    product,
                    StockMovementType.ADJUSTMENT,
                    opening_stock,
                    user_id,
                    reference_type=ReferenceType.ADJUSTMENT,
                    notes="Opening stock",
                )
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(product)
        logger.info(f"Shop {shop_id}: created product {product.id} ({product.name})")
        return product

    def update_product(self, db: Session, shop_id: int, product_id: int,
                       data: ProductUpdate, user_id: int) -> Product:
        product = self.get_product(db, shop_id, product_id)
        self._check_references(db, shop_id, data)
        fields = self._product_fields(data)
        new_stock = fields.pop("stock_quantity")

        try:
            for key, value in fields.items():
                setattr(product, key, value)
            self._replace_prices(product, data.prices)

            change = new_stock - to_decimal(product.stock_quantity)
            if product.track_inventory and change != 0:
                inventory_service.record_movement(
                    db,
                    product,
                    StockMovementType.ADJUSTMENT,
                    change,
                    user_id,
                    reference_type=ReferenceType.ADJUSTMENT,
                    notes="Stock edited on product",
                )
            elif not product.track_inventory:
                product.stock_quantity = Decimal("0")
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(product)
        return product

    def set_active(self, db: Session, shop_id: int, product_id: int, is_active: bool) -> Product:
        product = self.get_product(db, shop_id, product_id)
        product.is_active = is_active
        db.commit()
        db.refresh(product)
        return product

    def delete_product(self, db: Session, shop_id: int, product_id: int) -> None:
        product = self.get_product(db, shop_id, product_id)
        on_order = (
            db.query(PurchaseOrderItem.id)
            .filter(PurchaseOrderItem.product_id == product.id)
            .first()
        )
        if on_order:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product is used in purchase orders and cannot be deleted",
            )
        db.delete(product)
        db.commit()
        logger.info(f"Shop {shop_id}: deleted product {product_id}")

    def resolve_unit_price(self, product: Product, price_type_id: Optional[int]) -> Decimal:
        """Price under the given price type, falling back to the default selling price."""
        if price_type_id is not None:
            for price in product.prices:
                if price.price_type_id == price_type_id:
                    return to_decimal(price.selling_price)
        return to_decimal(product.default_selling_price)


product_service = ProductService()
