"""
Category Service - nested product categories.
"""

import logging
from typing import Dict, List, Optional, Set

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from kanaku.models.category import Category
from kanaku.schemas import CategoryCreate, CategoryUpdate
from kanaku.services.lookup import get_shop_row

logger = logging.getLogger(__name__)


class CategoryService:
    def list_categories(self, db: Session, shop_id: int) -> List[Category]:
        return (
            db.query(Category)
            .filter(Category.shop_id == shop_id)
            .order_by(Category.sort_order, Category.name)
            .all()
        )

    def get_category(self, db: Session, shop_id: int, category_id: int) -> Category:
        return get_shop_row(db, Category, shop_id, category_id, "Category")

    def get_tree(self, db: Session, shop_id: int) -> List[dict]:
        """Categories nested under their parents, each level in list order."""
        categories = self.list_categories(db, shop_id)
        nodes: Dict[int, dict] = {}
        for category in categories:
            nodes[category.id] = {
                "id": category.id,
                "shop_id": category.shop_id,
                "parent_id": category.parent_id,
                "name": category.name,
                "name_tamil": category.name_tamil,
                "image_url": category.image_url,
                "sort_order": category.sort_order,
                "children": [],
            }

        roots = []
        for category in categories:
            node = nodes[category.id]
            parent = nodes.get(category.parent_id)
            if parent is not None:
                parent["children"].append(node)
            else:
                roots.append(node)
        return roots

    def _descendant_ids(self, db: Session, shop_id: int, category_id: int) -> Set[int]:
        children_of: Dict[Optional[int], List[int]] = {}
        for cat_id, parent_id in (
            db.query(Category.id, Category.parent_id).filter(Category.shop_id == shop_id).all()
        ):
            children_of.setdefault(parent_id, []).append(cat_id)

        found: Set[int] = set()
        stack = list(children_of.get(category_id, []))
        while stack:
            current = stack.pop()
            if current in found:
                continue
            found.add(current)
            stack.extend(children_of.get(current, []))
        return found

    def _check_parent(self, db: Session, shop_id: int, parent_id: Optional[int],
                      category_id: Optional[int] = None) -> None:
        if parent_id is None:
            return
        if category_id is not None:
            if parent_id == category_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="A category cannot be its own parent",
                )
            if parent_id in self._descendant_ids(db, shop_id, category_id):
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="A category cannot be moved under one of its subcategories",
                )
        get_shop_row(db, Category, shop_id, parent_id, "Parent category")

    def create_category(self, db: Session, shop_id: int, data: CategoryCreate) -> Category:
        self._check_parent(db, shop_id, data.parent_id)
        category = Category(shop_id=shop_id, **data.model_dump())
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    def update_category(self, db: Session, shop_id: int, category_id: int,
                        data: CategoryUpdate) -> Category:
        category = self.get_category(db, shop_id, category_id)
        self._check_parent(db, shop_id, data.parent_id, category_id)
        for key, value in data.model_dump().items():
            setattr(category, key, value)
        db.commit()
        db.refresh(category)
        return category

    def delete_category(self, db: Session, shop_id: int, category_id: int) -> None:
        """Products become uncategorized and subcategories move to the top level."""
        category = self.get_category(db, shop_id, category_id)
        db.delete(category)
        db.commit()
        logger.info(f"Shop {shop_id}: deleted category {category_id}")


category_service = CategoryService()
