"""Async Cosmos DB client initialization."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

from program_review.config import CosmosConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContainerSpec:
    name: str
    partition_key: str
    unique_keys: tuple[str, ...] = ()


CONTAINERS: tuple[ContainerSpec, ...] = (
    ContainerSpec("departments", "/id"),
    ContainerSpec("programs", "/id"),
    ContainerSpec("documents", "/id"),
    ContainerSpec("comments", "/document_id"),
    # Unique keys are scoped to a logical partition, so usernames are unique
    # only because users are partitioned by username.
    ContainerSpec("users", "/username", unique_keys=("/username",)),
    ContainerSpec("actions", "/id"),
)


class CosmosClient:
    """Manages the async Cosmos DB client and database reference."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._database: DatabaseProxy | None = None

    async def initialize(self) -> None:
        """Create the client and make sure the database and containers exist."""
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)
        self._database = await self._client.create_database_if_not_exists(self._config.database)
        for spec in CONTAINERS:
            kwargs = {}
            if spec.unique_keys:
                kwargs["unique_key_policy"] = {
                    "uniqueKeys": [{"paths": [path]} for path in spec.unique_keys]
                }
            await self._database.create_container_if_not_exists(
                id=spec.name,
                partition_key=PartitionKey(path=spec.partition_key),
                **kwargs,
            )
        logger.info(
            "Cosmos DB ready — database=%s containers=%d",
            self._config.database,
            len(CONTAINERS),
        )

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None

    @property
    def database(self) -> DatabaseProxy:
        if self._database is None:
            raise RuntimeError("CosmosClient not initialized — call initialize() first")
        return self._database
