"""User ORM — the single persisted entity.

Invariants:
    - id is an autoincrement 64-bit integer primary key assigned by the store,
      so every id accepted by parse_user_id is a valid lookup key
    - name and email are non-nullable text; email uniqueness is not enforced
    - created_at is assigned by the store at insert (server default) and never updated

Design Decisions:
    - BigInteger with an Integer variant on SQLite: only INTEGER PRIMARY KEY
      aliases SQLite's rowid and autoincrements there
"""

from datetime import datetime

from sqlalchemy import BigInteger, Integer, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class User(Base):
    """A user record."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
