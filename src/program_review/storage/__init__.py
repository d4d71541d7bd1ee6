"""Revision file storage in Azure Blob Storage."""

from program_review.storage.files import RevisionFileStore, read_limited, revision_extension

__all__ = ["RevisionFileStore", "read_limited", "revision_extension"]
