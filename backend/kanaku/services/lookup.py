"""
Shop-scoped row lookups shared by the services.
"""

from fastapi import HTTPException, status
from sqlalchemy.orm import Session


def get_shop_row(db: Session, model, shop_id: int, row_id: int, label: str):
    """Fetch a row that must belong to the given shop, or raise 404."""
    row = (
        db.query(model)
        .filter(model.id == row_id, model.shop_id == shop_id)
        .first()
    )
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    return row


def like_pattern(search: str) -> str:
    return f"%{search.strip()}%"
