"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from program_review.models.base import DocumentBase

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=DocumentBase)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """CRUD operations for one container.

    ``update`` replaces the whole item in a single call, which is the unit of
    atomicity for every aggregate mutation.
    """

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)

    async def create(self, item: T) -> T:
        """Insert a new item."""
        await self._container.create_item(body=item.model_dump(mode="json"))
        logger.debug("Created %s id=%s", self.container_name, item.id)
        return item

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Read a single item, or None when it does not exist."""
        try:
            data = await self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None
        return self.model_class.model_validate(data)

    async def update(self, item: T, partition_key: str) -> T:  # noqa: ARG002
        """Replace the stored item with ``item``."""
        item.touch()
        await self._container.replace_item(item=item.id, body=item.model_dump(mode="json"))
        logger.debug("Replaced %s id=%s", self.container_name, item.id)
        return item

    async def delete(self, item_id: str, partition_key: str) -> bool:
        """Delete an item. Returns False if it did not exist."""
        try:
            await self._container.delete_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return False
        logger.debug("Deleted %s id=%s", self.container_name, item_id)
        return True

    async def query(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[T]:
        """Run a parameterized query across partitions."""
        items = self._container.query_items(query=query, parameters=parameters or [])
        return [self.model_class.model_validate(item) async for item in items]

    async def list_all(self) -> list[T]:
        """Fetch every item, newest first."""
        return await self.query("SELECT * FROM c ORDER BY c.created_at DESC")
