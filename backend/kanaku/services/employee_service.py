"""
Shop employees: invitations, roles and removal.
"""

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from kanaku.models.employee import ShopEmployee
from kanaku.models.enums import EmployeeStatus, UserRole
from kanaku.models.shop import Shop
from kanaku.models.user import User
from kanaku.services.lookup import get_shop_row

logger = logging.getLogger(__name__)


class EmployeeService:
    def list_employees(self, db: Session, shop_id: int) -> List[ShopEmployee]:
        return (
            db.query(ShopEmployee)
            .filter(ShopEmployee.shop_id == shop_id)
            .order_by(ShopEmployee.created_at.desc(), ShopEmployee.id.desc())
            .all()
        )

    def invite_employee(self, db: Session, shop: Shop, email: str, role: UserRole) -> ShopEmployee:
        """
        Invite someone to the shop by email.

        Users that already have an account are added as active employees;
        everyone else stays pending until they register.
        """
        email = email.strip().lower()

        if shop.owner and shop.owner.email == email:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="The shop owner is already an admin",
            )

        existing = (
            db.query(ShopEmployee)
            .filter(ShopEmployee.shop_id == shop.id, ShopEmployee.invited_email == email)
            .first()
        )
        if existing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="This email has already been invited",
            )

        user = db.query(User).filter(User.email == email).first()
        employee = ShopEmployee(
            shop_id=shop.id,
            invited_email=email,
            user_id=user.id if user else None,
            role=role,
            status=EmployeeStatus.ACTIVE if user else EmployeeStatus.PENDING,
        )
        db.add(employee)
        db.commit()
        db.refresh(employee)
        logger.info(f"Shop {shop.id}: invited {email} as {role.value} ({employee.status.value})")
        return employee

    def update_role(self, db: Session, shop_id: int, employee_id: int, role: UserRole) -> ShopEmployee:
        employee = get_shop_row(db, ShopEmployee, shop_id, employee_id, "Employee")
        employee.role = role
        db.commit()
        db.refresh(employee)
        return employee

    def remove_employee(self, db: Session, shop_id: int, employee_id: int) -> None:
        employee = get_shop_row(db, ShopEmployee, shop_id, employee_id, "Employee")
        db.delete(employee)
        db.commit()
        logger.info(f"Shop {shop_id}: removed employee {employee_id}")

    def claim_invitations(self, db: Session, user: User) -> int:
        """Attach pending invitations for the user's email. Caller commits."""
        pending = (
            db.query(ShopEmployee)
            .filter(
                ShopEmployee.invited_email == user.email,
                ShopEmployee.status == EmployeeStatus.PENDING,
            )
            .all()
        )
        for employee in pending:
            employee.user_id = user.id
            employee.status = EmployeeStatus.ACTIVE
        return len(pending)


employee_service = EmployeeService()
