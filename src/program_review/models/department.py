"""Department and program document models."""

from __future__ import annotations

from pydantic import Field

from program_review.config import MAX_PROGRAM_NAME_LENGTH
from program_review.models.base import DocumentBase


class Department(DocumentBase):
    """An academic department; chairs are user ids."""

    name: str = Field(min_length=1)
    chairs: list[str] = Field(default_factory=list)


class Program(DocumentBase):
    """A program offered by a department."""

    name: str = Field(min_length=1, max_length=MAX_PROGRAM_NAME_LENGTH)
    department_id: str
