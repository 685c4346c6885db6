"""Audit logging for mutating operations"""
import logging
from typing import Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from eventquote.models.audit import Audit
from eventquote.core.enums import AuditAction
from eventquote.core.metrics import audit_logs_created
from eventquote.utils.hashing import payload_hash

logger = logging.getLogger(__name__)


async def log_audit(
    db: AsyncSession,
    user_id: int,
    action: AuditAction,
    payload: Optional[Any] = None
) -> None:
    """Add an audit row to the current transaction; the caller commits.

    Failures are logged and never interrupt the operation being audited.
    """
    try:
        if payload is None:
            payload = {}

        if hasattr(payload, "model_dump"):
            payload_dict = payload.model_dump(mode="json", exclude_unset=True)
        elif isinstance(payload, dict):
            payload_dict = payload
        else:
            payload_dict = {}

        audit_record = Audit(
            user_id=int(user_id),
            action=str(action),
            payload_hash=payload_hash(payload_dict),
        )

        db.add(audit_record)
        await db.flush()
        audit_logs_created.labels(action=str(action)).inc()

    except Exception as e:
        logger.error(f"Audit logging failed for action {action}: {e}", exc_info=True)
