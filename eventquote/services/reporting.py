"""Profitability reporting across persisted quotations."""
from datetime import date, datetime, time, timezone
from typing import Iterable, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.enums import DateMode, PaymentStatus, QuotationStatus, UserRole
from eventquote.core.metrics import track_db_operation
from eventquote.models.quotation import Quotation
from eventquote.schemas.reporting import GlobalProfitability, ProfitabilityLine
from eventquote.services.pricing import profitability

AVERAGE_DAYS_PER_MONTH = 30.44


def current_month_range(today: Optional[date] = None) -> Tuple[date, date]:
    today = today or date.today()
    first = today.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, date.fromordinal(next_first.toordinal() - 1)


def day_bounds(date_from: date, date_to: date) -> Tuple[datetime, datetime]:
    """Start of ``date_from`` to the last instant of ``date_to``, in UTC."""
    return (
        datetime.combine(date_from, time.min, tzinfo=timezone.utc),
        datetime.combine(date_to, time.max, tzinfo=timezone.utc),
    )


def summarize_profitability(
    quotations: Iterable,
    date_from: date,
    date_to: date,
    monthly_fixed_costs: float,
    mode: DateMode = DateMode.CREATION,
) -> GlobalProfitability:
    quotations = list(quotations)
    days_in_range = (date_to - date_from).days + 1
    timeframe_in_months = days_in_range / AVERAGE_DAYS_PER_MONTH
    total_fixed_costs = monthly_fixed_costs * timeframe_in_months

    total_revenue = sum(q.total_revenue for q in quotations)
    total_operational_costs = sum(q.total_costs for q in quotations)
    total_costs = total_operational_costs + total_fixed_costs
    profit = total_revenue - total_costs

    lines = []
    for q in quotations:
        margin = q.total_revenue - q.total_costs
        lines.append(ProfitabilityLine(
            id=q.id,
            name=q.name,
            event_type=q.event_type,
            status=q.status,
            payment_status=q.payment_status,
            total_revenue=q.total_revenue,
            total_costs=q.total_costs,
            gross_margin=margin,
            gross_profitability=profitability(margin, q.total_revenue),
            created_at=q.created_at,
            estimated_payment_date=q.estimated_payment_date,
        ))

    return GlobalProfitability(
        date_from=date_from,
        date_to=date_to,
        mode=mode,
        total_revenue=total_revenue,
        total_operational_costs=total_operational_costs,
        monthly_fixed_costs=monthly_fixed_costs,
        total_fixed_costs=total_fixed_costs,
        total_costs=total_costs,
        profit=profit,
        profitability=profitability(profit, total_revenue),
        quotation_count=len(quotations),
        timeframe_in_months=timeframe_in_months,
        quotations=lines,
    )


@track_db_operation("select", "quotations")
async def select_for_report(
    db: AsyncSession,
    current_user,
    date_from: date,
    date_to: date,
    mode: DateMode,
    payment_status: Optional[PaymentStatus],
    approval_status: Optional[QuotationStatus],
):
    start, end = day_bounds(date_from, date_to)
    q = select(Quotation)

    if current_user.role != UserRole.ADMIN:
        q = q.where(Quotation.created_by == int(current_user.id))

    if mode == DateMode.PAYMENT:
        # a null payment date never satisfies the range
        q = q.where(
            Quotation.estimated_payment_date.is_not(None),
            Quotation.estimated_payment_date >= start,
            Quotation.estimated_payment_date <= end,
        )
    else:
        q = q.where(Quotation.created_at >= start, Quotation.created_at <= end)

    if payment_status is not None:
        q = q.where(Quotation.payment_status == payment_status)
    if approval_status is not None:
        q = q.where(Quotation.status == approval_status)

    res = await db.execute(q.order_by(Quotation.created_at.desc(), Quotation.id.desc()))
    return res.scalars().all()
