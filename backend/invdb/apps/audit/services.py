from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from . import models

logger = logging.getLogger(__name__)

MAX_AUDIT_RECORDS = 200


def record_event(
    db: Session,
    *,
    inventory_id: Optional[int],
    action: models.AuditActionEnum,
    before: Optional[dict] = None,
    after: Optional[dict] = None,
    reason: Optional[str] = None,
    performed_by: Optional[int] = None,
) -> Optional[models.AuditRecord]:
    """
    Best-effort audit writer.

    Called after the mutation has been committed, in its own commit. A
    failure is logged and swallowed; the mutation stays in place and the
    caller still gets its response.
    """
    try:
        record = models.AuditRecord(
            inventory_id=inventory_id,
            action=models.AuditActionEnum(action).value,
            performed_by=performed_by,
            before_state=before or {},
            after_state=after or {},
            reason=reason,
        )
        db.add(record)
        db.commit()
        return record
    except Exception:
        db.rollback()
        logger.warning(
            "Failed to record inventory audit",
            extra={
                "inventory_id": inventory_id,
                "audit_action": getattr(action, "value", action),
            },
            exc_info=True,
        )
        return None


def list_recent_events(
    db: Session,
    *,
    limit: int = MAX_AUDIT_RECORDS,
    inventory_id: Optional[int] = None,
    action: Optional[models.AuditActionEnum] = None,
) -> List[models.AuditRecord]:
    """Newest first, never more than MAX_AUDIT_RECORDS rows."""
    limit = max(1, min(limit, MAX_AUDIT_RECORDS))
    query = db.query(models.AuditRecord)
    if inventory_id is not None:
        query = query.filter(models.AuditRecord.inventory_id == inventory_id)
    if action:
        query = query.filter(models.AuditRecord.action == models.AuditActionEnum(action).value)
    return (
        query.order_by(models.AuditRecord.performed_at.desc(), models.AuditRecord.id.desc())
        .limit(limit)
        .all()
    )
