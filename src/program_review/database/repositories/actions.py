"""Repository for the actions container (partitioned by /id)."""

from __future__ import annotations

from program_review.config import ACTIONS_PER_PAGE
from program_review.database.repositories.base import BaseRepository
from program_review.models.action import Action


class ActionRepository(BaseRepository[Action]):
    container_name = "actions"
    model_class = Action

    async def list_page(self, page: int, per_page: int = ACTIONS_PER_PAGE) -> list[Action]:
        """Fetch one page of actions, newest first."""
        return await self.query(
            "SELECT * FROM c ORDER BY c.created_at DESC OFFSET @offset LIMIT @limit",
            [
                {"name": "@offset", "value": page * per_page},
                {"name": "@limit", "value": per_page},
            ],
        )
