"""User Routes — the five CRUD endpoints over the users table.

Invariants:
    - Path id validated before the body; body validated before any store call
    - Absent rows map to 404 "User not found" for get, update and delete
    - Successful mutations return the store-confirmed representation,
      except delete, which returns 204 with no body

Design Decisions:
    - Path id taken as str and parsed by core.validate_input: the 400 messages
      for missing vs malformed ids are part of the API contract
    - Repository injected via Depends(get_user_repository): tests swap in
      fakes through app.dependency_overrides
"""

from fastapi import APIRouter, Depends, Request, Response, status

from app.core.errors import NotFoundError
from app.core.repository_protocols import UserRepository
from app.core.validate_input import parse_user_id
from app.infrastructure.user_repository import get_user_repository
from app.schemas.user import UserPayload, UserResponse

router = APIRouter(tags=["users"])


@router.get("/users", response_model=list[UserResponse])
async def list_users(
    repo: UserRepository = Depends(get_user_repository),
):
    """List all users in store order. Empty table → []."""
    rows = await repo.list_all()
    return [UserResponse(**row) for row in rows]


@router.get("/user/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str, repo: UserRepository = Depends(get_user_repository),
):
    uid = parse_user_id(user_id)
    row = await repo.get(uid)
    if row is None:
        raise NotFoundError(uid)
    return UserResponse(**row)


@router.post(
    "/user", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    request: Request, repo: UserRepository = Depends(get_user_repository),
):
    """Create a user. id and created_at are assigned by the store."""
    payload = UserPayload.from_body(await request.body())
    row = await repo.create(payload.name, payload.email)
    return UserResponse(**row)


@router.put("/user/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: Request,
    repo: UserRepository = Depends(get_user_repository),
):
    """Replace name and email. id and created_at never change."""
    uid = parse_user_id(user_id)
    payload = UserPayload.from_body(await request.body())
    row = await repo.update(uid, payload.name, payload.email)
    if row is None:
        raise NotFoundError(uid)
    return UserResponse(**row)


@router.delete("/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str, repo: UserRepository = Depends(get_user_repository),
):
    uid = parse_user_id(user_id)
    if not await repo.delete(uid):
        raise NotFoundError(uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
