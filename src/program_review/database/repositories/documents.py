"""Repository for the documents container (partitioned by /id)."""

from __future__ import annotations

from program_review.database.repositories.base import BaseRepository
from program_review.models.document import Document


class DocumentRepository(BaseRepository[Document]):
    container_name = "documents"
    model_class = Document

    async def get_by_program(self, program_id: str) -> list[Document]:
        """Fetch all documents belonging to a program."""
        return await self.query(
            "SELECT * FROM c WHERE c.program_id = @program_id ORDER BY c.created_at DESC",
            [{"name": "@program_id", "value": program_id}],
        )
