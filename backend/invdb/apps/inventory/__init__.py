"""
Inventory module.

Handles suppliers, stock items and quantity adjustments.
"""

from .router import router  # noqa: F401
from . import models  # noqa: F401
