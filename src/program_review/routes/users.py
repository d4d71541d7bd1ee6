"""User routes — administrator-only account management."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from program_review.auth.middleware import ADMINISTRATORS, require_groups
from program_review.database.repositories.users import UserRepository
from program_review.schemas import UserCreate
from program_review.services import users as users_svc

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_groups(ADMINISTRATORS))],
)


@router.get("")
async def list_users(request: Request) -> list[dict[str, Any]]:
    users = await UserRepository(request.app.state.cosmos.database).list_all()
    return [user.to_public() for user in users]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(request: Request, body: UserCreate) -> dict[str, Any]:
    """Create an account; the password is stored as a bcrypt hash."""
    repo = UserRepository(request.app.state.cosmos.database)
    user = await users_svc.create_user(body, repo)
    return user.to_public()


@router.get("/{user_id}")
async def get_user(request: Request, user_id: str) -> dict[str, Any]:
    user = await UserRepository(request.app.state.cosmos.database).get_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user.to_public()
