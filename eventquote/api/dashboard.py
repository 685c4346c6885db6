"""Global profitability dashboard"""
import logging
from datetime import date
from enum import Enum
from typing import Optional, Type

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventquote.core.enums import DateMode, PaymentStatus, QuotationStatus
from eventquote.core.errors import InputValidationError
from eventquote.core.security import get_current_user
from eventquote.db.session import get_db
from eventquote.models.user import User
from eventquote.schemas.reporting import GlobalProfitability
from eventquote.services.global_settings import default_monthly_fixed_costs
from eventquote.services.parameters import ensure_global_parameters
from eventquote.services.reporting import current_month_range, select_for_report, summarize_profitability

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["dashboard"])

ALL = "ALL"


def _optional_filter(value: str, enum_cls: Type[Enum], field: str) -> Optional[Enum]:
    if value is None or value.upper() == ALL:
        return None
    try:
        return enum_cls(value.upper())
    except ValueError:
        allowed = ", ".join([ALL] + [e.value for e in enum_cls])
        raise InputValidationError([
            {"field": field, "message": f"Must be one of: {allowed}", "type": "enum"}
        ])


@router.get("/global-profitability", response_model=GlobalProfitability)
async def global_profitability(
    date_from: Optional[date] = Query(None, alias="dateFrom"),
    date_to: Optional[date] = Query(None, alias="dateTo"),
    mode: DateMode = Query(DateMode.CREATION),
    status: str = Query(ALL),
    approval: str = Query(QuotationStatus.APPROVED.value),
    monthly_fixed_costs: Optional[float] = Query(None, alias="monthlyFixedCosts", ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Revenue, costs and profit over a date range.

    Without explicit dates the current calendar month is used. ``status``
    filters on payment status and ``approval`` on quotation status; either
    accepts ``ALL``.
    """
    default_from, default_to = current_month_range()
    date_from = date_from or default_from
    date_to = date_to or default_to
    if date_from > date_to:
        raise InputValidationError([
            {"field": "dateFrom", "message": "dateFrom must not be after dateTo", "type": "value_error"}
        ])

    payment_status = _optional_filter(status, PaymentStatus, "status")
    approval_status = _optional_filter(approval, QuotationStatus, "approval")

    if monthly_fixed_costs is None:
        monthly_fixed_costs = await default_monthly_fixed_costs(db)
    if monthly_fixed_costs is None:
        parameters = await ensure_global_parameters(db)
        monthly_fixed_costs = parameters.monthly_fixed_costs

    quotations = await select_for_report(
        db, current_user, date_from, date_to, mode, payment_status, approval_status
    )
    return summarize_profitability(quotations, date_from, date_to, monthly_fixed_costs, mode)
