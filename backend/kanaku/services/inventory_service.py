import logging
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from kanaku.models.enums import ReferenceType, StockMovementType
from kanaku.models.product import Product
from kanaku.models.stock_movement import StockMovement
from kanaku.schemas import StockAdjustment
from kanaku.services.billing import to_decimal
from kanaku.services.lookup import get_shop_row, like_pattern

logger = logging.getLogger(__name__)

STOCK_FILTERS = ("all", "low", "out", "ok")
RECENT_MOVEMENTS_LIMIT = 100


class InventoryService:
    """
    Stock levels and the stock movement ledger.

    Every change to Product.stock_quantity goes through record_movement(), so
    for tracked products the ledger always explains the current stock:
    quantity_after == quantity_before + quantity, chained per product.
    """

    def record_movement(
        self,
        db: Session,
        product: Product,
        movement_type: StockMovementType,
        quantity,
        user_id: int,
        reference_type: Optional[ReferenceType] = None,
        reference_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> StockMovement:
        """
        Apply a signed quantity to a product and append the ledger row.

        Does not commit; callers commit once their whole operation succeeded.
        """
        before = to_decimal(product.stock_quantity)
        change = to_decimal(quantity)
        after = before + change
        product.stock_quantity = after

        movement = StockMovement(
            shop_id=product.shop_id,
            product_id=product.id,
            type=movement_type,
            quantity=change,
            quantity_before=before,
            quantity_after=after,
            reference_type=reference_type,
            reference_id=reference_id,
            notes=notes,
            created_by=user_id,
        )
        db.add(movement)
        logger.debug(
            f"Stock {movement_type.value} for product {product.id}: {before} -> {after}"
        )
        return movement

    def list_inventory(
        self,
        db: Session,
        shop_id: int,
        stock_filter: str = "all",
        search: Optional[str] = None,
    ) -> List[Product]:
        """Tracked products filtered by stock level."""
        if stock_filter not in STOCK_FILTERS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown stock filter: {stock_filter}",
            )

        query = db.query(Product).filter(
            Product.shop_id == shop_id, Product.track_inventory.is_(True)
        )
        if search and search.strip():
            pattern = like_pattern(search)
            query = query.filter(or_(
                Product.name.ilike(pattern),
                Product.name_tamil.ilike(pattern),
                Product.sku.ilike(pattern),
                Product.barcode.ilike(pattern),
            ))

        if stock_filter == "low":
            query = query.filter(Product.stock_quantity <= Product.low_stock_threshold)
        elif stock_filter == "out":
            query = query.filter(Product.stock_quantity <= 0)
        elif stock_filter == "ok":
            query = query.filter(Product.stock_quantity > Product.low_stock_threshold)

        return query.order_by(Product.name).all()

    def list_movements(
        self, db: Session, shop_id: int, product_id: Optional[int] = None,
        limit: int = RECENT_MOVEMENTS_LIMIT,
    ) -> List[StockMovement]:
        query = db.query(StockMovement).filter(StockMovement.shop_id == shop_id)
        if product_id is not None:
            query = query.filter(StockMovement.product_id == product_id)
        return (
            query.order_by(StockMovement.created_at.desc(), StockMovement.id.desc())
            .limit(limit)
            .all()
        )

    def adjust_stock(
        self, db: Session, shop_id: int, data: StockAdjustment, user_id: int
    ) -> StockMovement:
        """Manual adjustment or customer return."""
        product = get_shop_row(db, Product, shop_id, data.product_id, "Product")
        if not product.track_inventory:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Inventory tracking is disabled for this product",
            )

        new_stock = to_decimal(product.stock_quantity) + to_decimal(data.quantity)
        if new_stock < Decimal("0"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Stock cannot go below zero",
            )

        try:
            movement = self.record_movement(
                db,
                product,
                data.type,
                data.quantity,
                user_id,
                reference_type=ReferenceType.ADJUSTMENT,
                notes=data.notes,
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(movement)
        logger.info(
            f"Shop {shop_id}: {data.type.value} of {data.quantity} on product {product.id}"
        )
        return movement


inventory_service = InventoryService()
