"""Tests for document business logic."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError

from program_review.errors import (
    FileTooLargeError,
    RevisionFileExistsError,
    RevisionNotFoundError,
    UnsupportedFileTypeError,
)
from program_review.models.document import Document
from program_review.services import documents as documents_svc


def _document(revisions: int = 2) -> Document:
    document = Document(id="doc-1", title="Self study")
    for number in range(revisions):
        document.add_revision(f"v{number + 1}", None, "u-1")
    return document


def _upload(filename: str, data: bytes = b"%PDF-1.7") -> MagicMock:
    upload = MagicMock()
    upload.filename = filename
    upload.read = AsyncMock(side_effect=[data, b""])
    return upload


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def files() -> AsyncMock:
    store = AsyncMock()
    store.upload.return_value = "blob-1"
    return store


class TestUpdateDocument:
    """Test title and pointer changes."""

    async def test_sets_revision_and_saves(self, repo: AsyncMock) -> None:
        document = _document()

        assert await documents_svc.update_document(document, {"current_revision": 0}, repo) is True

        assert document.current_revision == 0
        repo.update.assert_awaited_once_with(document, "doc-1")

    async def test_invalid_revision_is_not_saved(self, repo: AsyncMock) -> None:
        document = _document()

        result = await documents_svc.update_document(
            document, {"title": "Renamed", "current_revision": 5}, repo
        )

        assert result is False
        assert document.current_revision == 1
        assert document.title == "Self study"
        repo.update.assert_not_awaited()

    async def test_title_only(self, repo: AsyncMock) -> None:
        document = _document()

        await documents_svc.update_document(document, {"title": "Renamed"}, repo)

        assert document.title == "Renamed"
        assert document.current_revision == 1


class TestRevisions:
    """Test adding and deleting revisions."""

    async def test_add_revision_persists(self, repo: AsyncMock) -> None:
        document = _document(0)

        revision = await documents_svc.add_revision(document, "init", "u-2", repo)

        assert revision.author_id == "u-2"
        assert revision.filename is None
        assert document.current_revision == 0
        repo.update.assert_awaited_once_with(document, "doc-1")

    async def test_delete_revision_removes_file_after_save(
        self, repo: AsyncMock, files: AsyncMock
    ) -> None:
        document = _document()
        document.attach_file(0, "blob-0", ".pdf")
        order: list[str] = []
        repo.update.side_effect = lambda *_: order.append("save")
        files.delete.side_effect = lambda *_: order.append("delete")

        removed = await documents_svc.delete_revision(document, 0, repo, files)

        assert removed is not None
        assert removed.filename == "blob-0"
        assert order == ["save", "delete"]
        files.delete.assert_awaited_once_with("blob-0")

    async def test_delete_revision_without_file(self, repo: AsyncMock, files: AsyncMock) -> None:
        await documents_svc.delete_revision(_document(), 1, repo, files)
        files.delete.assert_not_awaited()

    async def test_delete_invalid_revision(self, repo: AsyncMock, files: AsyncMock) -> None:
        assert await documents_svc.delete_revision(_document(), 7, repo, files) is None
        repo.update.assert_not_awaited()

    async def test_delete_revision_keeps_going_when_blob_delete_fails(
        self, repo: AsyncMock, files: AsyncMock
    ) -> None:
        document = _document()
        document.attach_file(1, "blob-1", ".pdf")
        files.delete.side_effect = RuntimeError("storage down")

        removed = await documents_svc.delete_revision(document, 1, repo, files)

        assert removed is not None
        repo.update.assert_awaited_once()


class TestAttachRevisionFile:
    """Test the upload step."""

    async def test_stores_and_records_file(self, repo: AsyncMock, files: AsyncMock) -> None:
        document = _document()

        revision = await documents_svc.attach_revision_file(
            document, 0, _upload("Report.PDF"), repo, files
        )

        files.upload.assert_awaited_once_with(b"%PDF-1.7", ".pdf")
        assert revision.filename == "blob-1"
        assert revision.file_extension == ".pdf"
        repo.update.assert_awaited_once_with(document, "doc-1")

    async def test_conflict_when_revision_has_file(self, repo: AsyncMock, files: AsyncMock) -> None:
        document = _document()
        document.attach_file(0, "blob-0", ".pdf")

        with pytest.raises(RevisionFileExistsError):
            await documents_svc.attach_revision_file(document, 0, _upload("a.pdf"), repo, files)

        files.upload.assert_not_awaited()
        repo.update.assert_not_awaited()
        assert document.revisions[0].filename == "blob-0"

    async def test_invalid_revision(self, repo: AsyncMock, files: AsyncMock) -> None:
        with pytest.raises(RevisionNotFoundError):
            await documents_svc.attach_revision_file(_document(), 2, _upload("a.pdf"), repo, files)
        files.upload.assert_not_awaited()

    async def test_rejects_extension_before_mutation(
        self, repo: AsyncMock, files: AsyncMock
    ) -> None:
        document = _document()

        with pytest.raises(UnsupportedFileTypeError):
            await documents_svc.attach_revision_file(document, 0, _upload("a.exe"), repo, files)

        files.upload.assert_not_awaited()
        assert document.revisions[0].filename is None

    async def test_rejects_oversized_before_mutation(
        self, repo: AsyncMock, files: AsyncMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        document = _document()
        original = documents_svc.read_limited
        monkeypatch.setattr(
            documents_svc, "read_limited", lambda upload: original(upload, max_size=4)
        )

        with pytest.raises(FileTooLargeError):
            await documents_svc.attach_revision_file(document, 0, _upload("a.pdf"), repo, files)

        files.upload.assert_not_awaited()
        assert document.revisions[0].filename is None

    async def test_save_failure_discards_blob(self, repo: AsyncMock, files: AsyncMock) -> None:
        repo.update.side_effect = CosmosHttpResponseError(status_code=503, message="unavailable")

        with pytest.raises(CosmosHttpResponseError):
            await documents_svc.attach_revision_file(_document(), 0, _upload("a.pdf"), repo, files)

        files.delete.assert_awaited_once_with("blob-1")


class TestRevisionFileDownload:
    """Test reading files back."""

    async def test_reads_file(self, files: AsyncMock) -> None:
        document = _document()
        document.attach_file(1, "blob-1", ".docx")
        files.download.return_value = b"data"

        assert await documents_svc.read_revision_file(document, 1, files) == b"data"
        files.download.assert_awaited_once_with("blob-1")

    async def test_none_without_file(self, files: AsyncMock) -> None:
        assert await documents_svc.read_revision_file(_document(), 0, files) is None
        assert await documents_svc.read_revision_file(_document(), 9, files) is None
        files.download.assert_not_awaited()

    def test_download_filename(self) -> None:
        document = _document()
        document.attach_file(1, "blob-1", ".docx")

        name = documents_svc.download_filename(document, 1, "chair1")

        assert name == "Self study_revision_2_chair1.docx"


class TestDeleteDocument:
    """Test the cascade on document deletion."""

    async def test_cascades_comments_and_files(self, repo: AsyncMock, files: AsyncMock) -> None:
        document = _document()
        document.attach_file(0, "blob-0", ".pdf")
        repo.get.return_value = document
        repo.delete.return_value = True
        comments = AsyncMock()
        comments.delete_by_document.return_value = 3

        assert await documents_svc.delete_document("doc-1", repo, comments, files) is True

        repo.delete.assert_awaited_once_with("doc-1", "doc-1")
        comments.delete_by_document.assert_awaited_once_with("doc-1")
        files.delete.assert_awaited_once_with("blob-0")

    async def test_missing_document(self, repo: AsyncMock, files: AsyncMock) -> None:
        repo.get.return_value = None
        comments = AsyncMock()

        assert await documents_svc.delete_document("doc-1", repo, comments, files) is False

        repo.delete.assert_not_awaited()
        comments.delete_by_document.assert_not_awaited()

    async def test_comment_cleanup_failure_is_not_raised(
        self, repo: AsyncMock, files: AsyncMock
    ) -> None:
        repo.get.return_value = _document()
        repo.delete.return_value = True
        comments = AsyncMock()
        comments.delete_by_document.side_effect = CosmosHttpResponseError(
            status_code=503, message="unavailable"
        )

        assert await documents_svc.delete_document("doc-1", repo, comments, files) is True


class TestComments:
    """Test comment creation and removal."""

    async def test_add_comment_references_it(self, repo: AsyncMock) -> None:
        document = _document()
        comments = AsyncMock()

        comment = await documents_svc.add_comment(document, "u-2", "Looks good", repo, comments)

        comments.create.assert_awaited_once_with(comment)
        assert comment.document_id == "doc-1"
        assert document.comment_ids == [comment.id]
        repo.update.assert_awaited_once_with(document, "doc-1")

    async def test_delete_comment(self, repo: AsyncMock) -> None:
        document = _document()
        document.comment_ids.append("c-1")
        comments = AsyncMock()
        comments.delete.return_value = True

        assert await documents_svc.delete_comment(document, "c-1", repo, comments) is True

        comments.delete.assert_awaited_once_with("c-1", "doc-1")
        assert document.comment_ids == []

    async def test_delete_missing_comment(self, repo: AsyncMock) -> None:
        comments = AsyncMock()
        comments.delete.return_value = False

        assert await documents_svc.delete_comment(_document(), "c-9", repo, comments) is False
        repo.update.assert_not_awaited()
