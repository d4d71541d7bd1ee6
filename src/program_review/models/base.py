"""Base model shared by every Cosmos DB document type."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any, Self

from pydantic import BaseModel, Field

_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


def _now() -> datetime:
    return datetime.now(UTC)


class DocumentBase(BaseModel):
    """Common fields for records stored in a Cosmos DB container."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    def touch(self) -> None:
        """Mark the record as modified now."""
        self.updated_at = _now()

    def merged(self, changes: dict[str, Any]) -> Self:
        """Return a validated copy with ``changes`` applied.

        The id and timestamps cannot be changed this way.
        """
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if k not in _PROTECTED_FIELDS})
        return type(self).model_validate(data)
