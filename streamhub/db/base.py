# streamhub/db/base.py
"""
StreamHub — SQLAlchemy Base registry
====================================

Import this module (not `base_class`) wherever the full metadata is needed:
Alembic autogeneration, `create_all` in tests, seed scripts.
"""

from streamhub.db.base_class import Base
from streamhub.db import models  # noqa: F401  (registers every table)

__all__ = ["Base"]
