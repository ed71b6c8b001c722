from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

# Columns a PUT may touch. `reason` travels alongside but is not a column.
UPDATABLE_FIELDS = (
    "name",
    "sku",
    "category",
    "quantity",
    "unit_price",
    "supplier_id",
    "location",
    "min_stock",
    "notes",
    "deleted",
)

# Columns stored NOT NULL; an explicit null in a PUT is rejected.
NON_NULLABLE_FIELDS = ("name", "sku", "quantity", "deleted")


class InventoryItemCreate(BaseModel):
    # name/sku presence is enforced by the repository (400).
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[float] = None
    supplier_id: Optional[int] = None
    location: Optional[str] = None
    min_stock: Optional[int] = None
    notes: Optional[str] = None
    reason: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[float] = None
    supplier_id: Optional[int] = None
    location: Optional[str] = None
    min_stock: Optional[int] = None
    notes: Optional[str] = None
    deleted: Optional[bool] = None
    reason: Optional[str] = None

    def changes(self) -> dict:
        """Fields the client actually sent, explicit nulls included."""
        sent = self.model_dump(exclude_unset=True)
        return {field: sent[field] for field in UPDATABLE_FIELDS if field in sent}


class QuantityAdjustRequest(BaseModel):
    delta: int = 0
    reason: Optional[str] = None

    @field_validator("delta", mode="before")
    @classmethod
    def _coerce_delta(cls, value: Any) -> int:
        if value is None or isinstance(value, bool):
            return int(value or 0)
        try:
            return int(value)
        except (TypeError, ValueError, OverflowError):
            pass
        try:
            return int(float(value))
        except (TypeError, ValueError, OverflowError):
            return 0


class InventoryItemRead(BaseModel):
    id: int
    name: str
    sku: str
    category: Optional[str] = None
    quantity: int
    unit_price: Optional[float] = None
    supplier_id: Optional[int] = None
    location: Optional[str] = None
    min_stock: Optional[int] = None
    notes: Optional[str] = None
    deleted: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DeleteResult(BaseModel):
    deleted: bool = True
