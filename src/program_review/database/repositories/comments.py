"""Repository for the comments container (partitioned by /document_id)."""

from __future__ import annotations

import logging

from program_review.database.repositories.base import BaseRepository
from program_review.models.comment import Comment

logger = logging.getLogger(__name__)


class CommentRepository(BaseRepository[Comment]):
    container_name = "comments"
    model_class = Comment

    async def get_by_document(self, document_id: str) -> list[Comment]:
        """Fetch a document's comments, oldest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.document_id = @document_id ORDER BY c.created_at ASC",
            [{"name": "@document_id", "value": document_id}],
        )

    async def delete_by_document(self, document_id: str) -> int:
        """Delete every comment on a document. Returns the number removed."""
        removed = 0
        for comment in await self.get_by_document(document_id):
            if await self.delete(comment.id, document_id):
                removed += 1
        return removed
