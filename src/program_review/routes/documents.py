"""Document routes — document CRUD, revisions, revision files, comments."""

from __future__ import annotations

import logging
import mimetypes
import string
from typing import Annotated, Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile, status

from program_review.auth.middleware import require_authenticated_user
from program_review.database.repositories.comments import CommentRepository
from program_review.database.repositories.documents import DocumentRepository
from program_review.models.document import Document
from program_review.schemas import CommentCreate, DocumentCreate, DocumentUpdate, RevisionCreate
from program_review.services import documents as documents_svc

router = APIRouter(
    prefix="/documents",
    tags=["documents"],
    dependencies=[Depends(require_authenticated_user)],
)
logger = logging.getLogger(__name__)

CurrentUser = Annotated[dict[str, Any], Depends(require_authenticated_user)]

_PLAIN_FILENAME_CHARS = frozenset(string.ascii_letters + string.digits + " ._-()',")


def _content_disposition(filename: str) -> str:
    """Build an attachment header that survives non-ASCII and quoted titles."""
    if set(filename) <= _PLAIN_FILENAME_CHARS:
        return f'attachment; filename="{filename}"'
    fallback = "".join(char if char in _PLAIN_FILENAME_CHARS else "_" for char in filename)
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


async def _load(repo: DocumentRepository, document_id: str) -> Document:
    document = await repo.get(document_id, document_id)
    if document is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return document


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_document(request: Request, body: DocumentCreate) -> Document:
    """Create a document with an empty revision history."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = Document(title=body.title, program_id=body.program_id)
    await repo.create(document)
    logger.info("Document created — id=%s", document.id)
    return document


@router.get("/{document_id}")
async def get_document(request: Request, document_id: str) -> dict[str, Any]:
    """Return a document with its comments."""
    database = request.app.state.cosmos.database
    document = await _load(DocumentRepository(database), document_id)
    comments = await CommentRepository(database).get_by_document(document_id)
    return {
        **document.model_dump(mode="json"),
        "comments": [comment.model_dump(mode="json") for comment in comments],
    }


@router.patch("/{document_id}")
async def update_document(request: Request, document_id: str, body: DocumentUpdate) -> Document:
    """Change the title and/or the current revision pointer."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = await _load(repo, document_id)
    if not await documents_svc.update_document(document, body.changes(), repo):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid revision")
    return document


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(request: Request, document_id: str) -> Response:
    """Delete a document together with its comments and revision files."""
    database = request.app.state.cosmos.database
    deleted = await documents_svc.delete_document(
        document_id,
        DocumentRepository(database),
        CommentRepository(database),
        request.app.state.files,
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{document_id}/revisions", status_code=status.HTTP_201_CREATED)
async def create_revision(
    request: Request,
    document_id: str,
    body: RevisionCreate,
    user: CurrentUser,
) -> dict[str, Any]:
    """Append an empty revision authored by the signed-in user."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = await _load(repo, document_id)
    revision = await documents_svc.add_revision(document, body.message, user["id"], repo)
    return {"index": document.current_revision, **revision.model_dump(mode="json")}


@router.delete("/{document_id}/revisions/{index}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_revision(request: Request, document_id: str, index: int) -> Response:
    """Delete a revision and its file."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = await _load(repo, document_id)
    removed = await documents_svc.delete_revision(document, index, repo, request.app.state.files)
    if removed is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Revision not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{document_id}/revisions/{index}/file")
async def upload_revision_file(
    request: Request,
    document_id: str,
    index: int,
    file: Annotated[UploadFile, File()],
) -> dict[str, Any]:
    """Attach a file to a revision that does not have one yet."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = await _load(repo, document_id)
    revision = await documents_svc.attach_revision_file(
        document, index, file, repo, request.app.state.files
    )
    return revision.model_dump(mode="json")


@router.get("/{document_id}/revisions/{index}/file")
async def download_revision_file(
    request: Request,
    document_id: str,
    index: int,
    user: CurrentUser,
) -> Response:
    """Download a revision's file as an attachment."""
    repo = DocumentRepository(request.app.state.cosmos.database)
    document = await _load(repo, document_id)
    data = await documents_svc.read_revision_file(document, index, request.app.state.files)
    if data is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Revision file not found")
    filename = documents_svc.download_filename(document, index, user["username"])
    media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
    return Response(
        content=data,
        media_type=media_type,
        headers={"Content-Disposition": _content_disposition(filename)},
    )


@router.post("/{document_id}/comments", status_code=status.HTTP_201_CREATED)
async def create_comment(
    request: Request,
    document_id: str,
    body: CommentCreate,
    user: CurrentUser,
) -> dict[str, Any]:
    """Comment on a document."""
    database = request.app.state.cosmos.database
    documents_repo = DocumentRepository(database)
    document = await _load(documents_repo, document_id)
    comment = await documents_svc.add_comment(
        document, user["id"], body.body, documents_repo, CommentRepository(database)
    )
    return comment.model_dump(mode="json")


@router.delete("/{document_id}/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(request: Request, document_id: str, comment_id: str) -> Response:
    """Remove a comment from a document."""
    database = request.app.state.cosmos.database
    documents_repo = DocumentRepository(database)
    document = await _load(documents_repo, document_id)
    deleted = await documents_svc.delete_comment(
        document, comment_id, documents_repo, CommentRepository(database)
    )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
