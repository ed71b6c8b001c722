from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from . import models


class AuditRecordRead(BaseModel):
    id: int
    inventory_id: Optional[int] = None
    action: models.AuditActionEnum
    performed_by: Optional[int] = None
    performed_at: datetime
    before_state: Optional[dict] = None
    after_state: Optional[dict] = None
    reason: Optional[str] = None

    class Config:
        from_attributes = True
