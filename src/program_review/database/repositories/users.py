"""Repository for the users container (partitioned by /username)."""

from __future__ import annotations

from azure.cosmos.exceptions import CosmosResourceExistsError

from program_review.database.repositories.base import BaseRepository
from program_review.errors import UsernameTakenError
from program_review.models.user import User


class UserRepository(BaseRepository[User]):
    container_name = "users"
    model_class = User

    async def create(self, item: User) -> User:
        """Insert a user; a duplicate username raises ``UsernameTakenError``."""
        try:
            return await super().create(item)
        except CosmosResourceExistsError as exc:
            raise UsernameTakenError(f"Username {item.username!r} is taken") from exc

    async def get_by_id(self, user_id: str) -> User | None:
        """Look a user up by id (cross-partition)."""
        users = await self.query(
            "SELECT * FROM c WHERE c.id = @id",
            [{"name": "@id", "value": user_id}],
        )
        return users[0] if users else None

    async def get_by_username(self, username: str) -> User | None:
        users = await self.query(
            "SELECT * FROM c WHERE c.username = @username",
            [{"name": "@username", "value": username}],
        )
        return users[0] if users else None

    async def get_many(self, user_ids: list[str]) -> list[User]:
        """Fetch the users whose ids are in ``user_ids``."""
        if not user_ids:
            return []
        return await self.query(
            "SELECT * FROM c WHERE ARRAY_CONTAINS(@ids, c.id)",
            [{"name": "@ids", "value": user_ids}],
        )
