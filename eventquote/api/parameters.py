"""Global pricing parameters administration"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventquote.core.audit_log import log_audit
from eventquote.core.enums import AuditAction
from eventquote.core.redis import get_redis
from eventquote.core.response_builders import build_parameters_response
from eventquote.core.security import get_current_user, require_admin
from eventquote.db.session import get_db
from eventquote.models.user import User
from eventquote.schemas.parameters import (
    CacheInvalidation,
    GlobalParametersData,
    GlobalParametersOut,
    GlobalParametersUpdateOut,
)
from eventquote.services.cache import invalidate_quotation_cache
from eventquote.services.parameters import ensure_global_parameters, replace_global_parameters

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin/parameters", tags=["parameters"])


@router.get("/", response_model=GlobalParametersOut)
async def get_parameters(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    parameters = await ensure_global_parameters(db)
    return build_parameters_response(parameters)


@router.put("/", response_model=GlobalParametersUpdateOut)
async def update_parameters(
    payload: GlobalParametersData,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    parameters = await replace_global_parameters(db, payload)
    await log_audit(db, int(current_user.id), AuditAction.UPDATE_PARAMETERS, payload)
    await db.commit()
    await db.refresh(parameters)
    logger.info(f"Global parameters replaced by user {current_user.id}, now version {parameters.version}")

    # cached quotations are already unreachable under the new version
    invalidation = await invalidate_quotation_cache(get_redis())

    return GlobalParametersUpdateOut(
        **build_parameters_response(parameters).model_dump(),
        cache_invalidation=CacheInvalidation(**invalidation),
    )
