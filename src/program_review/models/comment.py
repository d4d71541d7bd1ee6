"""Comment document model — stored in the comments container, partitioned by document."""

from __future__ import annotations

from pydantic import Field

from program_review.config import MAX_COMMENT_LENGTH
from program_review.models.base import DocumentBase


class Comment(DocumentBase):
    document_id: str
    author_id: str
    body: str = Field(min_length=1, max_length=MAX_COMMENT_LENGTH)
