from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from invdb.database import get_db

from . import models, schemas, services


router = APIRouter(
    prefix="/api/v1/audit",
    tags=["audit"],
)


@router.get("", response_model=List[schemas.AuditRecordRead])
def list_audit_records(
    inventory_id: Optional[int] = None,
    action: Optional[models.AuditActionEnum] = None,
    limit: int = services.MAX_AUDIT_RECORDS,
    db: Session = Depends(get_db),
):
    return services.list_recent_events(
        db,
        limit=limit,
        inventory_id=inventory_id,
        action=action,
    )
