"""Document business logic — revisions, revision files, comments, cascades."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from program_review.errors import RevisionFileExistsError, RevisionNotFoundError
from program_review.models.comment import Comment
from program_review.storage.files import read_limited, revision_extension

if TYPE_CHECKING:
    from fastapi import UploadFile

    from program_review.database.repositories.comments import CommentRepository
    from program_review.database.repositories.documents import DocumentRepository
    from program_review.models.document import Document, Revision
    from program_review.storage.files import RevisionFileStore

logger = logging.getLogger(__name__)


async def update_document(
    document: Document,
    changes: dict,
    repo: DocumentRepository,
) -> bool:
    """Apply a title / current revision change. Returns False for an invalid revision."""
    if "current_revision" in changes and not document.set_revision(changes["current_revision"]):
        return False
    if changes.get("title") is not None:
        document.title = changes["title"]
    await repo.update(document, document.id)
    logger.info("Document updated — id=%s", document.id)
    return True


async def delete_document(
    document_id: str,
    documents_repo: DocumentRepository,
    comments_repo: CommentRepository,
    files: RevisionFileStore,
) -> bool:
    """Delete a document, then its comments and revision files.

    Cleanup runs after the document is gone; its failures are logged only.
    """
    document = await documents_repo.get(document_id, document_id)
    if document is None or not await documents_repo.delete(document_id, document_id):
        return False
    logger.info("Document deleted — id=%s", document_id)

    try:
        removed = await comments_repo.delete_by_document(document_id)
        logger.info("Comments deleted — document=%s count=%d", document_id, removed)
    except Exception:  # noqa: BLE001
        logger.warning("Failed to delete comments — document=%s", document_id, exc_info=True)

    for revision in document.revisions:
        if revision.filename:
            await _discard_file(files, revision.filename)
    return True


async def add_revision(
    document: Document,
    message: str,
    author_id: str,
    repo: DocumentRepository,
) -> Revision:
    """Append an empty revision and persist the document."""
    revision = document.add_revision(message, None, author_id)
    await repo.update(document, document.id)
    logger.info(
        "Revision created — document=%s revision=%d",
        document.id,
        document.current_revision,
    )
    return revision


async def attach_revision_file(
    document: Document,
    index: int,
    upload: UploadFile,
    repo: DocumentRepository,
    files: RevisionFileStore,
) -> Revision:
    """Validate, store and record the file for a revision that has none.

    Every check runs before anything is written. If saving the document fails
    the stored blob is removed again.
    """
    if not document.valid_revision(index):
        raise RevisionNotFoundError(f"Revision {index} does not exist")
    if document.revisions[index].has_file:
        raise RevisionFileExistsError("Revision file must be null for a new file to be uploaded")
    extension = revision_extension(upload.filename)
    data = await read_limited(upload)

    blob_name = await files.upload(data, extension)
    try:
        revision = document.attach_file(index, blob_name, extension)
        await repo.update(document, document.id)
    except Exception:
        logger.error(
            "Error saving document after file upload — document=%s revision=%d",
            document.id,
            index,
        )
        await _discard_file(files, blob_name)
        raise
    logger.info("Revision file attached — document=%s revision=%d", document.id, index)
    return revision


async def delete_revision(
    document: Document,
    index: int,
    repo: DocumentRepository,
    files: RevisionFileStore,
) -> Revision | None:
    """Remove a revision and then its file. Returns None for an invalid index."""
    removed = document.delete_revision(index)
    if removed is None:
        return None
    await repo.update(document, document.id)
    logger.info("Revision deleted — document=%s revision=%d", document.id, index)
    if removed.filename:
        await _discard_file(files, removed.filename)
    return removed


async def read_revision_file(
    document: Document,
    index: int,
    files: RevisionFileStore,
) -> bytes | None:
    """Return the content of a revision's file, or None when there is none."""
    if not document.valid_revision(index):
        return None
    revision = document.revisions[index]
    if not revision.filename:
        return None
    return await files.download(revision.filename)


def download_filename(document: Document, index: int, username: str) -> str:
    """Name offered to the client for a revision file download."""
    extension = document.revisions[index].file_extension or ""
    return f"{document.title}_revision_{index + 1}_{username}{extension}"


async def add_comment(
    document: Document,
    author_id: str,
    body: str,
    documents_repo: DocumentRepository,
    comments_repo: CommentRepository,
) -> Comment:
    """Create a comment and reference it from the document."""
    comment = Comment(document_id=document.id, author_id=author_id, body=body)
    await comments_repo.create(comment)
    document.comment_ids.append(comment.id)
    await documents_repo.update(document, document.id)
    logger.info("Comment created — document=%s comment=%s", document.id, comment.id)
    return comment


async def delete_comment(
    document: Document,
    comment_id: str,
    documents_repo: DocumentRepository,
    comments_repo: CommentRepository,
) -> bool:
    """Delete a comment and drop its reference. Returns False if it did not exist."""
    if not await comments_repo.delete(comment_id, document.id):
        return False
    if comment_id in document.comment_ids:
        document.comment_ids.remove(comment_id)
        await documents_repo.update(document, document.id)
    logger.info("Comment deleted — document=%s comment=%s", document.id, comment_id)
    return True


async def _discard_file(files: RevisionFileStore, blob_name: str) -> None:
    try:
        await files.delete(blob_name)
    except Exception:  # noqa: BLE001
        logger.warning("Failed to delete revision file — blob=%s", blob_name, exc_info=True)
