"""Action document model — audit trail of administrative changes."""

from __future__ import annotations

from program_review.models.base import DocumentBase


class Action(DocumentBase):
    message: str
    user_id: str | None = None
    username: str | None = None
    target_type: str
    target_id: str
    target_name: str = ""
