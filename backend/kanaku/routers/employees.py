"""
API endpoints for shop employees.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from kanaku.database import get_db
from kanaku.dependencies import require_admin
from kanaku.schemas import EmployeeInvite, EmployeeResponse, EmployeeRoleUpdate
from kanaku.services.employee_service import employee_service
from kanaku.services.shop_service import ShopAccess

router = APIRouter()


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return employee_service.list_employees(db, access.shop_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def invite_employee(
    invite: EmployeeInvite,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    """Invite by email. Unknown emails stay pending until that person registers."""
    return employee_service.invite_employee(db, access.shop, invite.email, invite.role)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee_role(
    employee_id: int,
    update: EmployeeRoleUpdate,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    return employee_service.update_role(db, access.shop_id, employee_id, update.role)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_employee(
    employee_id: int,
    db: Session = Depends(get_db),
    access: ShopAccess = Depends(require_admin),
):
    employee_service.remove_employee(db, access.shop_id, employee_id)
