"""Global commission and fixed expense catalogs."""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.metrics import track_db_operation
from eventquote.models.global_settings import GlobalCommission, GlobalFixedExpense
from eventquote.schemas.global_settings import CommissionIn, FixedExpenseIn

logger = logging.getLogger(__name__)


@track_db_operation("select", "global_commissions")
async def list_commissions(db: AsyncSession) -> List[GlobalCommission]:
    res = await db.execute(select(GlobalCommission).order_by(GlobalCommission.id))
    return list(res.scalars().all())


@track_db_operation("select", "global_fixed_expenses")
async def list_fixed_expenses(db: AsyncSession) -> List[GlobalFixedExpense]:
    res = await db.execute(select(GlobalFixedExpense).order_by(GlobalFixedExpense.id))
    return list(res.scalars().all())


async def replace_commissions(db: AsyncSession, items: Sequence[CommissionIn]) -> List[GlobalCommission]:
    """Swap the whole catalog; the caller commits."""
    await db.execute(delete(GlobalCommission))
    rows = [GlobalCommission(**item.model_dump()) for item in items]
    db.add_all(rows)
    await db.flush()
    logger.info(f"Commission catalog replaced with {len(rows)} entries")
    return rows


async def replace_fixed_expenses(db: AsyncSession, items: Sequence[FixedExpenseIn]) -> List[GlobalFixedExpense]:
    """Swap the whole catalog; the caller commits."""
    await db.execute(delete(GlobalFixedExpense))
    rows = [GlobalFixedExpense(**item.model_dump()) for item in items]
    db.add_all(rows)
    await db.flush()
    logger.info(f"Fixed expense catalog replaced with {len(rows)} entries")
    return rows


async def default_monthly_fixed_costs(db: AsyncSession) -> Optional[float]:
    """Sum of the default fixed expenses, or None when none is marked default."""
    res = await db.execute(select(GlobalFixedExpense.amount).where(GlobalFixedExpense.is_default.is_(True)))
    amounts = list(res.scalars().all())
    if not amounts:
        return None
    return float(sum(amounts))
