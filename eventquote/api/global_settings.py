"""Global commission and fixed expense catalogs"""
import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction
from eventquote.core.response_builders import build_commission_response, build_fixed_expense_response
from eventquote.core.security import get_current_user, require_admin
from eventquote.db.session import get_db
from eventquote.models.user import User
from eventquote.schemas.global_settings import CommissionIn, CommissionOut, FixedExpenseIn, FixedExpenseOut
from eventquote.services.global_settings import (
    list_commissions,
    list_fixed_expenses,
    replace_commissions,
    replace_fixed_expenses,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/global-settings", tags=["global-settings"])


@router.get("/commissions", response_model=List[CommissionOut])
async def get_commissions(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [build_commission_response(c) for c in await list_commissions(db)]


@router.put("/commissions", response_model=List[CommissionOut])
async def put_commissions(
    payload: List[CommissionIn],
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Replace the whole commission catalog with ``payload``."""
    rows = await replace_commissions(db, payload)
    await log_audit(
        db, int(current_user.id), AuditAction.REPLACE_COMMISSIONS,
        {"commissions": [item.model_dump(mode="json") for item in payload]},
    )
    await db.commit()
    for row in rows:
        await db.refresh(row)
    return [build_commission_response(c) for c in rows]


@router.get("/fixed-expenses", response_model=List[FixedExpenseOut])
async def get_fixed_expenses(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [build_fixed_expense_response(e) for e in await list_fixed_expenses(db)]


@router.put("/fixed-expenses", response_model=List[FixedExpenseOut])
async def put_fixed_expenses(
    payload: List[FixedExpenseIn],
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Replace the whole fixed expense catalog.

    Expenses marked ``isDefault`` add up to the monthly fixed costs used by
    the profitability dashboard.
    """
    rows = await replace_fixed_expenses(db, payload)
    await log_audit(
        db, int(current_user.id), AuditAction.REPLACE_FIXED_EXPENSES,
        {"fixed_expenses": [item.model_dump(mode="json") for item in payload]},
    )
    await db.commit()
    for row in rows:
        await db.refresh(row)
    logger.info(f"Fixed expenses replaced by user {current_user.id}")
    return [build_fixed_expense_response(e) for e in rows]
