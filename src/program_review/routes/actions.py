"""Action log routes — paged audit trail for administrators."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from program_review.auth.middleware import ADMINISTRATORS, require_groups
from program_review.database.repositories.actions import ActionRepository
from program_review.models.action import Action

router = APIRouter(
    prefix="/actions",
    tags=["actions"],
    dependencies=[Depends(require_groups(ADMINISTRATORS))],
)


@router.get("")
async def list_actions(request: Request, page: Annotated[int, Query(ge=0)] = 0) -> list[Action]:
    """Return one page of actions, newest first."""
    return await ActionRepository(request.app.state.cosmos.database).list_page(page)
