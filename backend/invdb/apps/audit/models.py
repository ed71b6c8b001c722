from __future__ import annotations

import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, Text, desc

from invdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditActionEnum(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    QTY_ADJUST = "QTY_ADJUST"
    DELETE = "DELETE"
    SOFT_DELETE = "SOFT_DELETE"


class AuditRecord(Base):
    """
    Append-only audit trail for inventory mutations.

    `inventory_id` is not a foreign key: rows outlive a hard
    delete of the item they describe.
    """

    __tablename__ = "inventory_audit"
    __table_args__ = (
        Index("ix_inventory_audit_item_time", "inventory_id", "performed_at"),
        Index("ix_inventory_audit_time_desc", desc("performed_at")),
    )

    id = Column(Integer, primary_key=True, index=True)
    inventory_id = Column(Integer, nullable=True, index=True)
    action = Column(String(32), nullable=False, index=True)
    performed_by = Column(Integer, nullable=True)
    performed_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    before_state = Column(JSON, nullable=True)
    after_state = Column(JSON, nullable=True)
    reason = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<AuditRecord id={self.id} inventory_id={self.inventory_id} action={self.action}>"
