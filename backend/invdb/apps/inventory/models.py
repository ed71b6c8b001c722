from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from invdb.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # Free-text or a JSON blob such as '{"phone": "..."}'.
    contact = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    items = relationship("InventoryItem", back_populates="supplier")


class InventoryItem(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("sku", name="uq_inventory_sku"),
        Index("ix_inventory_location", "location"),
        Index("ix_inventory_category", "category"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    sku = Column(String(64), nullable=False)
    category = Column(String(128), nullable=True)
    # No floor: negative quantities are allowed.
    quantity = Column(Integer, nullable=False, default=0)
    unit_price = Column(Float, nullable=True, default=0.0)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=True, index=True)
    location = Column(String(128), nullable=True)
    min_stock = Column(Integer, nullable=True, default=0)
    notes = Column(Text, nullable=True)
    deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    supplier = relationship("Supplier", back_populates="items")

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} sku={self.sku} qty={self.quantity}>"
