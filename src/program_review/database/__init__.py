"""Cosmos DB access layer."""

from program_review.database.client import CONTAINERS, CosmosClient

__all__ = ["CONTAINERS", "CosmosClient"]
