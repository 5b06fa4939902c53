"""Boundary Protocols — contract between route handlers and the store.

Invariants:
    - Handlers never touch SQLAlchemy directly; they receive a UserRepository
    - Rows cross the boundary as plain dicts with keys id, name, email, created_at
    - Mutations report "not found" as None/False instead of raising, so the
      caller decides the HTTP mapping
    - Store failures raise StoreError

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no base class
"""

from typing import Protocol

from app.core.domain_types import UserId


class UserRepository(Protocol):
    """Contract for user persistence — implemented by infrastructure."""
    async def list_all(self) -> list[dict]: ...
    async def get(self, user_id: UserId) -> dict | None: ...
    async def create(self, name: str, email: str) -> dict: ...
    async def update(
        self, user_id: UserId, name: str, email: str,
    ) -> dict | None: ...
    async def delete(self, user_id: UserId) -> bool: ...
