"""Document model — a titled record with an ordered history of revisions.

Revisions are addressed by their position in ``revisions``. The
``current_revision`` pointer designates the revision that is displayed; it is
kept within ``0 <= current_revision < len(revisions)`` whenever revisions
exist and is ``0`` for an empty history.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field, model_validator

from program_review.errors import RevisionFileExistsError, RevisionNotFoundError
from program_review.models.base import DocumentBase


class Revision(BaseModel):
    """One versioned entry in a document's history, optionally with a file."""

    message: str = ""
    author_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    filename: str | None = None
    file_extension: str | None = None

    @model_validator(mode="after")
    def _file_fields_paired(self) -> Revision:
        if (self.filename is None) != (self.file_extension is None):
            raise ValueError("filename and file_extension must be set together")
        return self

    @property
    def has_file(self) -> bool:
        return self.filename is not None


class Document(DocumentBase):
    """A reviewable document owned by a program."""

    title: str = Field(min_length=1)
    program_id: str | None = None
    revisions: list[Revision] = Field(default_factory=list)
    current_revision: int = 0
    comment_ids: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _current_revision_in_range(self) -> Document:
        if self.revisions and not self.valid_revision(self.current_revision):
            raise ValueError("current_revision must index an existing revision")
        if not self.revisions and self.current_revision != 0:
            raise ValueError("current_revision must be 0 when there are no revisions")
        return self

    def valid_revision(self, index: object) -> bool:
        """Return True if ``index`` addresses an existing revision."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        return 0 <= index < len(self.revisions)

    def add_revision(
        self,
        message: str,
        file: tuple[str, str] | None,
        author_id: str,
    ) -> Revision:
        """Append a revision and make it current.

        ``file`` is normally ``None``; the file is attached by a later upload.
        """
        filename, extension = file if file is not None else (None, None)
        revision = Revision(
            message=message,
            author_id=author_id,
            filename=filename,
            file_extension=extension,
        )
        self.revisions.append(revision)
        self.current_revision = len(self.revisions) - 1
        return revision

    def set_revision(self, index: object) -> bool:
        """Point ``current_revision`` at ``index``. Returns False when out of range."""
        if not self.valid_revision(index):
            return False
        self.current_revision = index
        return True

    def delete_revision(self, index: object) -> Revision | None:
        """Remove and return the revision at ``index``, or None if it does not exist.

        The pointer keeps designating the same revision when an earlier one is
        removed; otherwise it is clamped to the last remaining revision.
        """
        if not self.valid_revision(index):
            return None
        removed = self.revisions.pop(index)
        if index < self.current_revision:
            self.current_revision -= 1
        self.current_revision = max(0, min(self.current_revision, len(self.revisions) - 1))
        return removed

    def attach_file(self, index: int, filename: str, extension: str) -> Revision:
        """Record an uploaded file on a revision that has none yet."""
        if not self.valid_revision(index):
            raise RevisionNotFoundError(f"Revision {index} does not exist")
        revision = self.revisions[index]
        if revision.has_file:
            raise RevisionFileExistsError(
                "Revision file must be null for a new file to be uploaded"
            )
        revision.filename = filename
        revision.file_extension = extension
        return revision
