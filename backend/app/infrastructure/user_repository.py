"""SQL User Repository — the UserRepository contract over an AsyncSession.

Invariants:
    - Every statement binds its parameters (never string-interpolated)
    - Statements target the users Table (Core), so rowcount and
      inserted_primary_key come straight from the driver cursor
    - Each mutation commits once; any failure rolls back and raises StoreError
    - update/delete are single conditional statements; rowcount 0 means absent
    - created_at returned after create/update is re-read from the store,
      never taken from the local clock

Design Decisions:
    - Conditional mutation over exists-then-mutate: a concurrent delete between
      the two steps would otherwise report success on zero rows
    - Insert and timestamp re-read share one transaction: a failed re-read
      rolls the insert back instead of leaving an orphaned row behind a 500
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import UserId
from app.infrastructure.database import get_db, to_store_error
from app.models.user import User

logger = logging.getLogger(__name__)

_users = User.__table__


class SqlUserRepository:
    """UserRepository backed by SQLAlchemy Core statements on the users table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _operation(self, name: str) -> AsyncGenerator[None, None]:
        """Roll back and translate SQLAlchemy failures for one repository call."""
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise to_store_error(e, name)

    async def list_all(self) -> list[dict]:
        async with self._operation("select_all"):
            result = await self._db.execute(select(_users))
            return [dict(row) for row in result.mappings().all()]

    async def get(self, user_id: UserId) -> dict | None:
        async with self._operation("select_by_id"):
            result = await self._db.execute(
                select(_users).where(_users.c.id == user_id),
            )
            row = result.mappings().one_or_none()
            return dict(row) if row else None

    async def create(self, name: str, email: str) -> dict:
        async with self._operation("insert"):
            result = await self._db.execute(
                insert(_users).values(name=name, email=email),
            )
            user_id = result.inserted_primary_key[0]
            created_at = await self._select_created_at(user_id)
            await self._db.commit()
        logger.info("User created", extra={"user_id": user_id})
        return {
            "id": user_id, "name": name, "email": email,
            "created_at": created_at,
        }

    async def update(
        self, user_id: UserId, name: str, email: str,
    ) -> dict | None:
        async with self._operation("update"):
            result = await self._db.execute(
                update(_users)
                .where(_users.c.id == user_id)
                .values(name=name, email=email),
            )
            if result.rowcount == 0:
                await self._db.rollback()
                return None
            created_at = await self._select_created_at(user_id)
            await self._db.commit()
        logger.info("User updated", extra={"user_id": user_id})
        return {
            "id": user_id, "name": name, "email": email,
            "created_at": created_at,
        }

    async def delete(self, user_id: UserId) -> bool:
        async with self._operation("delete"):
            result = await self._db.execute(
                delete(_users)
                .where(_users.c.id == user_id),
            )
            if result.rowcount == 0:
                await self._db.rollback()
                return False
            await self._db.commit()
        logger.info("User deleted", extra={"user_id": user_id})
        return True

    async def _select_created_at(self, user_id: int):
        result = await self._db.execute(
            select(_users.c.created_at).where(_users.c.id == user_id),
        )
        return result.scalar_one()


def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlUserRepository:
    """FastAPI dependency — one repository per request session."""
    return SqlUserRepository(db)
