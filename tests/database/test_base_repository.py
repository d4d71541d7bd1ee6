"""Tests for BaseRepository CRUD operations."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from program_review.database.repositories.documents import DocumentRepository
from program_review.models.document import Document


def _async_items(items: list[dict]):
    async def gen():
        for item in items:
            yield item

    return gen()


class TestBaseRepository:
    """Test the shared repository behavior through DocumentRepository."""

    @pytest.fixture
    def repo(self) -> DocumentRepository:
        """Create a repo for testing."""
        mock_db = MagicMock()
        mock_container = AsyncMock()
        mock_db.get_container_client.return_value = mock_container
        return DocumentRepository(mock_db)

    def test_uses_documents_container(self) -> None:
        mock_db = MagicMock()
        DocumentRepository(mock_db)
        mock_db.get_container_client.assert_called_once_with("documents")

    async def test_create_writes_json_body(self, repo: DocumentRepository) -> None:
        document = Document(title="Self study")

        result = await repo.create(document)

        assert result is document
        body = repo._container.create_item.call_args.kwargs["body"]  # noqa: SLF001
        assert body["id"] == document.id
        assert body["title"] == "Self study"
        assert isinstance(body["created_at"], str)

    async def test_get_returns_model(self, repo: DocumentRepository) -> None:
        repo._container.read_item.return_value = {  # noqa: SLF001
            "id": "doc-1",
            "title": "Self study",
            "revisions": [{"message": "init", "author_id": "u-1"}],
            "current_revision": 0,
            "_etag": "etag-1",
            "_ts": 1700000000,
        }

        document = await repo.get("doc-1", "doc-1")

        assert document is not None
        assert document.id == "doc-1"
        assert document.revisions[0].message == "init"
        repo._container.read_item.assert_awaited_once_with(  # noqa: SLF001
            item="doc-1", partition_key="doc-1"
        )

    async def test_get_returns_none_when_missing(self, repo: DocumentRepository) -> None:
        repo._container.read_item.side_effect = CosmosResourceNotFoundError(  # noqa: SLF001
            status_code=404, message="Not found"
        )

        assert await repo.get("doc-missing", "doc-missing") is None

    async def test_update_replaces_whole_item(self, repo: DocumentRepository) -> None:
        document = Document(title="Self study")
        document.add_revision("init", None, "u-1")
        before = document.updated_at

        await repo.update(document, document.id)

        kwargs = repo._container.replace_item.call_args.kwargs  # noqa: SLF001
        assert kwargs["item"] == document.id
        assert kwargs["body"]["revisions"][0]["message"] == "init"
        assert document.updated_at >= before

    async def test_update_propagates_storage_errors(self, repo: DocumentRepository) -> None:
        repo._container.replace_item.side_effect = CosmosHttpResponseError(  # noqa: SLF001
            status_code=503, message="Service unavailable"
        )

        with pytest.raises(CosmosHttpResponseError):
            await repo.update(Document(title="Self study"), "doc-1")

    async def test_delete(self, repo: DocumentRepository) -> None:
        assert await repo.delete("doc-1", "doc-1") is True
        repo._container.delete_item.assert_awaited_once_with(  # noqa: SLF001
            item="doc-1", partition_key="doc-1"
        )

    async def test_delete_missing_returns_false(self, repo: DocumentRepository) -> None:
        repo._container.delete_item.side_effect = CosmosResourceNotFoundError(  # noqa: SLF001
            status_code=404, message="Not found"
        )

        assert await repo.delete("doc-1", "doc-1") is False

    async def test_query_validates_items(self, repo: DocumentRepository) -> None:
        repo._container.query_items = MagicMock(  # noqa: SLF001
            return_value=_async_items([{"id": "doc-1", "title": "A"}, {"id": "doc-2", "title": "B"}])
        )

        result = await repo.query("SELECT * FROM c")

        assert [document.id for document in result] == ["doc-1", "doc-2"]
        repo._container.query_items.assert_called_once_with(  # noqa: SLF001
            query="SELECT * FROM c", parameters=[]
        )

    async def test_get_by_program(self, repo: DocumentRepository) -> None:
        repo.query = AsyncMock(return_value=[])

        await repo.get_by_program("prog-1")

        query_str, params = repo.query.call_args[0]
        assert "@program_id" in query_str
        assert params == [{"name": "@program_id", "value": "prog-1"}]
