"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is populated before create_all runs
"""

from app.models.user import User  # noqa: F401
