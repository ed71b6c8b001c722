from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invdb.database import get_db
from invdb.errors import DuplicateSkuError, NotFoundError, ValidationError
from invdb.apps.audit import services as audit_services
from invdb.apps.audit.models import AuditActionEnum
from . import models, schemas

HARD_DELETE = "hard"
SOFT_DELETE = "soft"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _snapshot(item: models.InventoryItem) -> dict:
    return schemas.InventoryItemRead.model_validate(item).model_dump(mode="json")


def _contains_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _is_sku_conflict(exc: IntegrityError) -> bool:
    message = str(getattr(exc, "orig", exc)).lower()
    return "sku" in message and ("unique" in message or "duplicate" in message)


class InventoryRepository:
    """
    Reads and writes inventory rows through a single session.

    Every mutation commits first, then re-reads the row and hands the
    before/after snapshots to the audit recorder. The audit write is a
    separate commit and never fails the mutation.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_items(
        self,
        *,
        category: Optional[str] = None,
        location: Optional[str] = None,
        q: Optional[str] = None,
    ) -> List[models.InventoryItem]:
        query = self.db.query(models.InventoryItem).filter(models.InventoryItem.deleted.is_(False))
        if category:
            query = query.filter(models.InventoryItem.category == category)
        if location:
            query = query.filter(models.InventoryItem.location == location)
        if q:
            pattern = _contains_pattern(q)
            query = query.filter(
                or_(
                    models.InventoryItem.name.ilike(pattern, escape="\\"),
                    models.InventoryItem.sku.ilike(pattern, escape="\\"),
                )
            )
        return query.order_by(models.InventoryItem.id.asc()).all()

    def get_item(self, item_id: int) -> models.InventoryItem:
        item = (
            self.db.query(models.InventoryItem)
            .filter(
                models.InventoryItem.id == item_id,
                models.InventoryItem.deleted.is_(False),
            )
            .first()
        )
        if not item:
            raise NotFoundError()
        return item

    def _get_any(self, item_id: int) -> models.InventoryItem:
        # Soft-deleted rows stay reachable for updates and deletes.
        item = self.db.get(models.InventoryItem, item_id)
        if not item:
            raise NotFoundError()
        return item

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _commit(self, sku: Optional[str]) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if _is_sku_conflict(exc):
                raise DuplicateSkuError(sku) from exc
            raise
        except Exception:
            self.db.rollback()
            raise

    def create_item(self, payload: schemas.InventoryItemCreate) -> models.InventoryItem:
        if not payload.name or not payload.sku:
            raise ValidationError("name and sku required")

        now = _utcnow()
        item = models.InventoryItem(
            name=payload.name,
            sku=payload.sku,
            category=payload.category,
            quantity=payload.quantity or 0,
            unit_price=payload.unit_price or 0,
            supplier_id=payload.supplier_id or None,
            location=payload.location or "",
            min_stock=payload.min_stock or 0,
            notes=payload.notes or "",
            deleted=False,
            created_at=now,
            updated_at=now,
        )
        self.db.add(item)
        self._commit(payload.sku)
        self.db.refresh(item)

        after = _snapshot(item)
        audit_services.record_event(
            self.db,
            inventory_id=item.id,
            action=AuditActionEnum.CREATE,
            before=None,
            after=after,
            reason=payload.reason,
        )
        return item

    def update_item(self, item_id: int, payload: schemas.InventoryItemUpdate) -> models.InventoryItem:
        item = self._get_any(item_id)
        changes = payload.changes()
        if not changes:
            raise ValidationError("No updatable fields provided")
        nulled = [field for field in schemas.NON_NULLABLE_FIELDS if field in changes and changes[field] is None]
        if nulled:
            raise ValidationError(f"{', '.join(nulled)} cannot be null")

        before = _snapshot(item)
        for field, value in changes.items():
            setattr(item, field, value)
        item.updated_at = _utcnow()
        self._commit(changes.get("sku", item.sku))
        self.db.refresh(item)

        audit_services.record_event(
            self.db,
            inventory_id=item.id,
            action=AuditActionEnum.UPDATE,
            before=before,
            after=_snapshot(item),
            reason=payload.reason,
        )
        return item

    def adjust_quantity(self, item_id: int, delta: int, reason: Optional[str] = None) -> models.InventoryItem:
        item = self._get_any(item_id)
        before = _snapshot(item)

        # Incremented in SQL, not from the value read above.
        item.quantity = models.InventoryItem.quantity + delta
        item.updated_at = _utcnow()
        self._commit(item.sku)
        self.db.refresh(item)

        audit_services.record_event(
            self.db,
            inventory_id=item.id,
            action=AuditActionEnum.QTY_ADJUST,
            before=before,
            after=_snapshot(item),
            reason=reason,
        )
        return item

    def remove_item(self, item_id: int, mode: str = SOFT_DELETE, reason: Optional[str] = None) -> dict:
        item = self._get_any(item_id)
        before = _snapshot(item)

        if (mode or SOFT_DELETE).lower() == HARD_DELETE:
            self.db.delete(item)
            action = AuditActionEnum.DELETE
        else:
            item.deleted = True
            item.updated_at = _utcnow()
            action = AuditActionEnum.SOFT_DELETE
        self._commit(before["sku"])

        audit_services.record_event(
            self.db,
            inventory_id=item_id,
            action=action,
            before=before,
            after=None,
            reason=reason,
        )
        return {"deleted": True}


def get_repository(db: Session = Depends(get_db)) -> InventoryRepository:
    return InventoryRepository(db)
