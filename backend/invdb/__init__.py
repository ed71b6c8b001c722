# backend/invdb/__init__.py
"""
Import ORM models from each app so that Base.metadata.create_all()
sees every table.

The actual model classes are kept in invdb/apps/*/models.py.
"""

from .apps.inventory import models as inventory_models      # suppliers + items
from .apps.audit import models as audit_models              # append-only audit trail

__all__ = [
    "inventory_models",
    "audit_models",
]
