import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction
from eventquote.core.policy import authorize, ensure_found, scope_to_actor
from eventquote.core.response_builders import build_operational_cost_concept_response
from eventquote.core.security import get_current_user
from eventquote.db.session import get_db
from eventquote.models.operational_cost_concept import OperationalCostConcept
from eventquote.models.user import User
from eventquote.schemas.operational_cost_concept import OperationalCostConceptIn, OperationalCostConceptOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/custom-operational-costs", tags=["custom-operational-costs"])


async def _get_concept(db: AsyncSession, concept_id: int, actor: User, action: str) -> OperationalCostConcept:
    res = await db.execute(select(OperationalCostConcept).where(OperationalCostConcept.id == concept_id))
    concept = res.scalars().first()
    ensure_found(concept, "Operational cost concept", concept_id)
    authorize(actor, concept.created_by, action, "operational cost concept")
    return concept


@router.get("/", response_model=List[OperationalCostConceptOut])
async def list_concepts(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    query = scope_to_actor(select(OperationalCostConcept), OperationalCostConcept, current_user)
    res = await db.execute(query.order_by(OperationalCostConcept.created_at.desc(), OperationalCostConcept.id.desc()))
    return [build_operational_cost_concept_response(c) for c in res.scalars().all()]


@router.post("/", response_model=OperationalCostConceptOut)
async def create_concept(
    payload: OperationalCostConceptIn,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    concept = OperationalCostConcept(
        name=payload.name,
        description=payload.description,
        created_by=int(current_user.id),
    )
    db.add(concept)
    await db.flush()
    await log_audit(db, int(current_user.id), AuditAction.CREATE_OPERATIONAL_COST_CONCEPT, payload)
    await db.commit()
    await db.refresh(concept)
    return build_operational_cost_concept_response(concept)


@router.put("/{concept_id}", response_model=OperationalCostConceptOut)
async def update_concept(
    concept_id: int,
    payload: OperationalCostConceptIn,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    concept = await _get_concept(db, concept_id, current_user, "update")
    concept.name = payload.name
    concept.description = payload.description

    await log_audit(db, int(current_user.id), AuditAction.UPDATE_OPERATIONAL_COST_CONCEPT, payload)
    await db.commit()
    await db.refresh(concept)
    return build_operational_cost_concept_response(concept)


@router.delete("/{concept_id}")
async def delete_concept(
    concept_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    concept = await _get_concept(db, concept_id, current_user, "delete")
    await db.delete(concept)
    await log_audit(
        db, int(current_user.id), AuditAction.DELETE_OPERATIONAL_COST_CONCEPT, {"concept_id": concept_id}
    )
    await db.commit()
    logger.info(f"Operational cost concept {concept_id} deleted")
    return {"success": True, "id": concept_id}
