import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction
from eventquote.core.policy import ensure_found
from eventquote.core.response_builders import build_employee_type_response
from eventquote.core.security import get_current_user, require_admin
from eventquote.db.session import get_db
from eventquote.models.employee_type import EmployeeType
from eventquote.models.user import User
from eventquote.schemas.employee_type import EmployeeTypeCreate, EmployeeTypeOut, EmployeeTypeUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/employee-types", tags=["employee-types"])


async def _get_employee_type(db: AsyncSession, employee_type_id: int) -> EmployeeType:
    res = await db.execute(select(EmployeeType).where(EmployeeType.id == employee_type_id))
    employee_type = res.scalars().first()
    ensure_found(employee_type, "Employee type", employee_type_id)
    return employee_type


@router.get("/", response_model=List[EmployeeTypeOut])
async def list_employee_types(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    res = await db.execute(select(EmployeeType).order_by(EmployeeType.name))
    return [build_employee_type_response(e) for e in res.scalars().all()]


@router.post("/", response_model=EmployeeTypeOut)
async def create_employee_type(
    payload: EmployeeTypeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    employee_type = EmployeeType(
        name=payload.name,
        is_operator=payload.is_operator,
        cost_per_day=payload.cost_per_day,
        created_by=int(current_user.id),
    )
    db.add(employee_type)
    await db.flush()
    await log_audit(db, int(current_user.id), AuditAction.CREATE_EMPLOYEE_TYPE, payload)
    await db.commit()
    await db.refresh(employee_type)
    logger.info(f"Employee type {employee_type.id} created")
    return build_employee_type_response(employee_type)


@router.put("/{employee_type_id}", response_model=EmployeeTypeOut)
async def update_employee_type(
    employee_type_id: int,
    payload: EmployeeTypeUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    employee_type = await _get_employee_type(db, employee_type_id)
    for field, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(employee_type, field, value)

    await log_audit(db, int(current_user.id), AuditAction.UPDATE_EMPLOYEE_TYPE, payload)
    await db.commit()
    await db.refresh(employee_type)
    return build_employee_type_response(employee_type)


@router.delete("/{employee_type_id}")
async def delete_employee_type(
    employee_type_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    employee_type = await _get_employee_type(db, employee_type_id)
    await db.delete(employee_type)
    await log_audit(
        db, int(current_user.id), AuditAction.DELETE_EMPLOYEE_TYPE, {"employee_type_id": employee_type_id}
    )
    await db.commit()
    logger.info(f"Employee type {employee_type_id} deleted")
    return {"success": True, "id": employee_type_id}
