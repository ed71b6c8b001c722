"""
Schema Manager.

Creates the inventory tables and seed rows the first time the service
starts against an empty store. Later starts leave schema and data alone.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from invdb.database import Base
from invdb.apps.audit import models as audit_models
from invdb.apps.inventory import models as inventory_models

logger = logging.getLogger(__name__)

INVENTORY_TABLES = [
    inventory_models.Supplier.__table__,
    inventory_models.InventoryItem.__table__,
    audit_models.AuditRecord.__table__,
]


def store_exists(engine: Engine) -> bool:
    inspector = sa.inspect(engine)
    return inspector.has_table(inventory_models.InventoryItem.__tablename__)


def seed_defaults(db: Session) -> None:
    now = datetime.now(timezone.utc)
    supplier = inventory_models.Supplier(
        name="Acme Supplies",
        contact='{"phone":"9999999999"}',
        created_at=now,
    )
    db.add(supplier)
    db.flush()

    db.add_all(
        [
            inventory_models.InventoryItem(
                name="Widget A",
                sku="WIDGET-A-001",
                category="Widgets",
                quantity=100,
                unit_price=49.99,
                supplier_id=supplier.id,
                location="WH-01-R01",
                min_stock=10,
                notes="First batch",
                created_at=now,
                updated_at=now,
            ),
            inventory_models.InventoryItem(
                name="Gadget B",
                sku="GADGET-B-001",
                category="Gadgets",
                quantity=50,
                unit_price=79.50,
                supplier_id=supplier.id,
                location="WH-02-R03",
                min_stock=5,
                notes="",
                created_at=now,
                updated_at=now,
            ),
        ]
    )


def init_db(engine: Engine) -> bool:
    """
    Create tables and seed data if the store is empty.

    Returns True when the store was initialised, False when it already
    existed and nothing was touched.
    """
    if store_exists(engine):
        logger.info("Inventory store already initialised; skipping bootstrap")
        return False

    Base.metadata.create_all(bind=engine, tables=INVENTORY_TABLES)
    session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    db = session_factory()
    try:
        seed_defaults(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    logger.info("Created inventory schema and seed data")
    return True
