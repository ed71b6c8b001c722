"""
Audit module.

Append-only record of every inventory mutation.
"""

from .router import router  # noqa: F401
from . import models  # noqa: F401
