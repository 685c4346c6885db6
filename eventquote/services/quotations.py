import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction
from eventquote.core.errors import DomainError
from eventquote.core.metrics import quotation_calculation_duration, quotations_calculated, track_db_operation
from eventquote.models.quotation import (
    Quotation,
    TicketSector,
    TicketVariation,
    AdditionalServiceItem,
)
from eventquote.schemas.quotation import QuotationResult
from eventquote.schemas.quotation_record import QuotationCreate
from eventquote.services.cache import QuotationCache
from eventquote.services.employee_types import EmployeeTypeLookup
from eventquote.services.parameters import ParametersProvider
from eventquote.services.pricing import compute_quotation, NO_TICKETS_MESSAGE
from eventquote.services.validator import parse_quotation_input

logger = logging.getLogger(__name__)


async def calculate_quotation(
    raw: Any,
    provider: ParametersProvider,
    lookup: EmployeeTypeLookup,
    cache: QuotationCache,
) -> QuotationResult:
    req = parse_quotation_input(raw)
    params, version = await provider.current()
    employee_costs = await lookup.costs_for(a.employee_type_id for a in req.employees)

    def compute() -> QuotationResult:
        with quotation_calculation_duration.time():
            result = compute_quotation(req, params, employee_costs)
        quotations_calculated.labels(platform=req.platform.name.value).inc()
        return result

    key = cache.fingerprint(req, version, employee_costs)
    return await cache.get_or_compute(key, compute)


def has_sellable_tickets(payload: QuotationCreate) -> bool:
    return any(
        v.price > 0 and v.quantity > 0
        for sector in payload.ticket_sectors
        for v in sector.variations
    )


def build_quotation(payload: QuotationCreate, owner_id: int) -> Quotation:
    """Build a Quotation with all of its child rows, ready for a single commit."""
    if not has_sellable_tickets(payload):
        raise DomainError(NO_TICKETS_MESSAGE)

    total_value = payload.total_value or sum(
        v.price * v.quantity for sector in payload.ticket_sectors for v in sector.variations
    )
    quotation = Quotation(
        name=payload.name,
        event_type=payload.event_type,
        platform_name=payload.platform_name,
        status=payload.status,
        payment_status=payload.payment_status,
        estimated_payment_date=payload.estimated_payment_date,
        created_by=owner_id,
        ticket_quantity=payload.ticket_quantity,
        total_value=total_value,
        platform_fee=payload.platform_fee,
        ticketing_fee=payload.ticketing_fee,
        additional_services=payload.additional_services,
        payment_fees=payload.payment_fees.model_dump(mode="json", by_alias=True),
        palco4_cost=payload.palco4_cost,
        line_cost=payload.line_cost,
        operational_costs=payload.operational_costs.model_dump(mode="json", by_alias=True),
        total_revenue=payload.total_revenue,
        total_costs=payload.total_costs,
        gross_margin=payload.gross_margin,
        gross_profitability=payload.gross_profitability,
    )
    quotation.ticket_sectors = [
        TicketSector(
            name=sector.name,
            variations=[
                TicketVariation(name=v.name, price=v.price, quantity=v.quantity)
                for v in sector.variations
            ],
        )
        for sector in payload.ticket_sectors
    ]
    quotation.additional_service_items = [
        AdditionalServiceItem(name=item.name, amount=item.amount, is_percentage=item.is_percentage)
        for item in payload.additional_service_items
    ]
    return quotation


async def save_quotation(db: AsyncSession, quotation: Quotation, payload: QuotationCreate) -> Quotation:
    """Commit the quotation, its children and the audit entry together, or nothing at all."""
    db.add(quotation)
    try:
        await db.flush()
        await log_audit(db, quotation.created_by, AuditAction.CREATE_QUOTATION, payload)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception(f"Failed to persist quotation '{quotation.name}'")
        raise
    return await load_quotation(db, quotation.id)


@track_db_operation("select", "quotations")
async def load_quotation(db: AsyncSession, quotation_id: int) -> Optional[Quotation]:
    res = await db.execute(
        select(Quotation)
        .where(Quotation.id == quotation_id)
        .options(
            selectinload(Quotation.ticket_sectors).selectinload(TicketSector.variations),
            selectinload(Quotation.additional_service_items),
        )
        .execution_options(populate_existing=True)
    )
    return res.scalars().first()
