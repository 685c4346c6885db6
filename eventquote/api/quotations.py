"""Quotation calculation, persistence and lifecycle endpoints"""
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Header, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from eventquote.api.deps import get_employee_type_lookup, get_parameters_provider, get_quotation_cache
from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction, PaymentStatus, QuotationStatus
from eventquote.core.errors import InternalError, QuotationServiceError
from eventquote.core.metrics import quotation_status_changes
from eventquote.core.policy import authorize, ensure_found, is_admin, scope_to_actor
from eventquote.core.rate_limit import check_rate_limit
from eventquote.core.response_builders import (
    build_quotation_response,
    build_quotation_response_list,
    build_recent_quotation,
)
from eventquote.core.security import get_current_user
from eventquote.db.session import get_db
from eventquote.models.quotation import Quotation, TicketSector
from eventquote.models.user import User
from eventquote.schemas.quotation import QuotationResult
from eventquote.schemas.quotation_record import (
    PaymentStatusUpdate,
    QuotationCreate,
    QuotationOut,
    StatusUpdate,
)
from eventquote.schemas.reporting import QuotationStats
from eventquote.services.cache import QuotationCache
from eventquote.services.employee_types import EmployeeTypeLookup
from eventquote.services.parameters import ParametersProvider
from eventquote.services.quotations import build_quotation, calculate_quotation, load_quotation, save_quotation
from eventquote.services.status import check_initial_status, check_transition
from eventquote.utils.idempotency import get_idempotent, set_idempotent

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quotations", tags=["quotations"])

RECENT_QUOTATIONS = 5


@router.post("/calculate", response_model=QuotationResult)
async def calculate(
    body: Any = Body(...),
    provider: ParametersProvider = Depends(get_parameters_provider),
    lookup: EmployeeTypeLookup = Depends(get_employee_type_lookup),
    cache: QuotationCache = Depends(get_quotation_cache),
    current_user: User = Depends(get_current_user),
):
    await check_rate_limit(int(current_user.id))
    try:
        return await calculate_quotation(body, provider, lookup, cache)
    except (QuotationServiceError, SQLAlchemyError):
        raise
    except Exception as e:
        logger.exception("Quotation calculation failed")
        raise InternalError() from e


@router.post("/", response_model=QuotationOut)
async def create_quotation(
    payload: QuotationCreate,
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await check_rate_limit(int(current_user.id))
    check_initial_status(payload.status, is_admin(current_user))

    idem_key = f"{current_user.id}:{idempotency_key}" if idempotency_key else None
    if idem_key:
        previous = await get_idempotent(idem_key)
        if previous:
            logger.info(f"Replaying quotation for idempotency key {idempotency_key}")
            return previous

    quotation = build_quotation(payload, int(current_user.id))
    saved = await save_quotation(db, quotation, payload)
    result = build_quotation_response(saved)
    logger.info(f"Quotation {saved.id} saved by user {current_user.id}")

    if idem_key:
        await set_idempotent(idem_key, result.model_dump(mode="json", by_alias=True))
    return result


@router.get("/", response_model=List[QuotationOut])
async def list_quotations(
    status: Optional[QuotationStatus] = Query(None),
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    q = scope_to_actor(select(Quotation), Quotation, current_user)
    if status is not None:
        q = q.where(Quotation.status == status)
    if payment_status is not None:
        q = q.where(Quotation.payment_status == payment_status)
    q = (
        q.options(
            selectinload(Quotation.ticket_sectors).selectinload(TicketSector.variations),
            selectinload(Quotation.additional_service_items),
        )
        .order_by(Quotation.created_at.desc(), Quotation.id.desc())
        .limit(limit)
        .offset(offset)
    )
    res = await db.execute(q)
    return build_quotation_response_list(res.scalars().all())


@router.get("/stats", response_model=QuotationStats)
async def quotation_stats(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Totals over approved quotations plus the most recent activity of any status."""
    q = scope_to_actor(select(Quotation), Quotation, current_user)
    res = await db.execute(q.order_by(Quotation.created_at.desc(), Quotation.id.desc()))
    quotations = res.scalars().all()

    approved = [q for q in quotations if q.status == QuotationStatus.APPROVED]
    total_revenue = sum(q.total_revenue for q in approved)
    total_costs = sum(q.total_costs for q in approved)

    return QuotationStats(
        total_quotations=len(quotations),
        approved_quotations=len(approved),
        total_revenue=total_revenue,
        total_costs=total_costs,
        average_profitability=(
            sum(q.gross_profitability for q in approved) / len(approved) if approved else 0.0
        ),
        recent_quotations=[build_recent_quotation(q) for q in quotations[:RECENT_QUOTATIONS]],
        is_admin=is_admin(current_user),
    )


@router.get("/{quotation_id}", response_model=QuotationOut)
async def get_quotation(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    quotation = await load_quotation(db, quotation_id)
    ensure_found(quotation, "Quotation", quotation_id)
    authorize(current_user, quotation.created_by, "view", "quotation")
    return build_quotation_response(quotation)


@router.delete("/{quotation_id}")
async def delete_quotation(
    quotation_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await check_rate_limit(int(current_user.id))
    quotation = await load_quotation(db, quotation_id)
    ensure_found(quotation, "Quotation", quotation_id)
    authorize(current_user, quotation.created_by, "delete", "quotation")

    await db.delete(quotation)
    await log_audit(db, int(current_user.id), AuditAction.DELETE_QUOTATION, {"quotation_id": quotation_id})
    await db.commit()
    logger.info(f"Quotation {quotation_id} deleted by user {current_user.id}")
    return {"success": True, "id": quotation_id}


@router.patch("/{quotation_id}/status", response_model=QuotationOut)
async def update_status(
    quotation_id: int,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await check_rate_limit(int(current_user.id))
    quotation = await load_quotation(db, quotation_id)
    ensure_found(quotation, "Quotation", quotation_id)
    authorize(current_user, quotation.created_by, "update", "quotation")
    check_transition(quotation.status, payload.status, is_admin(current_user))

    previous = quotation.status
    quotation.status = payload.status
    await log_audit(
        db,
        int(current_user.id),
        AuditAction.UPDATE_QUOTATION_STATUS,
        {"quotation_id": quotation_id, "from": str(previous), "to": str(payload.status)},
    )
    await db.commit()
    if previous != payload.status:
        quotation_status_changes.labels(from_status=str(previous), to_status=str(payload.status)).inc()
    return build_quotation_response(await load_quotation(db, quotation_id))


@router.patch("/{quotation_id}/payment-status", response_model=QuotationOut)
async def update_payment_status(
    quotation_id: int,
    payload: PaymentStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    await check_rate_limit(int(current_user.id))
    quotation = await load_quotation(db, quotation_id)
    ensure_found(quotation, "Quotation", quotation_id)
    authorize(current_user, quotation.created_by, "update", "quotation")

    quotation.payment_status = payload.payment_status
    await log_audit(
        db,
        int(current_user.id),
        AuditAction.UPDATE_PAYMENT_STATUS,
        {"quotation_id": quotation_id, "payment_status": str(payload.payment_status)},
    )
    await db.commit()
    return build_quotation_response(await load_quotation(db, quotation_id))
