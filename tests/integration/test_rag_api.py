"""Integration tests for the retrieval API endpoints."""

import pytest
from httpx import AsyncClient


class TestDocuments:
    """Tests for POST and DELETE /api/v1/rag/documents."""

    @pytest.mark.asyncio
    async def test_add_document_content(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/rag/documents",
            json={"id": "intro", "content": "Python is a language", "metadata": {"lang": "en"}},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "document_count": 1}

    @pytest.mark.asyncio
    async def test_add_long_document_is_chunked(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/rag/documents", json={"id": "long", "content": "数" * 1200}
        )

        assert response.status_code == 200
        assert response.json()["document_count"] == 3

    @pytest.mark.asyncio
    async def test_add_document_chunks(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/rag/documents",
            json={"id": "manual", "chunks": ["python part", "rust part"]},
        )

        assert response.status_code == 200
        assert response.json()["document_count"] == 2

    @pytest.mark.asyncio
    async def test_add_document_missing_content(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/rag/documents", json={"id": "empty"})

        assert response.status_code == 400
        error = response.json()["detail"]["error"]
        assert error["code"] == "missing_content"
        assert error["details"] == {"id": "empty"}

    @pytest.mark.asyncio
    async def test_add_document_embedding_failure(
        self, async_client: AsyncClient, mock_ollama_client
    ):
        mock_ollama_client.embed.side_effect = ConnectionError("ollama down")

        response = await async_client.post(
            "/api/v1/rag/documents", json={"id": "doc", "content": "text"}
        )

        assert response.status_code == 500
        error = response.json()["detail"]["error"]
        assert error["code"] == "document_add_error"
        assert "ollama down" in error["message"]

    @pytest.mark.asyncio
    async def test_clear_documents(self, async_client: AsyncClient):
        await async_client.post(
            "/api/v1/rag/documents", json={"id": "doc", "content": "python"}
        )

        response = await async_client.delete("/api/v1/rag/documents")

        assert response.status_code == 200
        assert response.json() == {"success": True, "document_count": 0}


class TestSearch:
    """Tests for POST /api/v1/rag/search."""

    @pytest.mark.asyncio
    async def test_search_orders_results(self, async_client: AsyncClient):
        for doc_id, content in [
            ("py", "python python"),
            ("rs", "rust rust"),
            ("ol", "ollama runs models"),
        ]:
            await async_client.post(
                "/api/v1/rag/documents",
                json={"id": doc_id, "content": content, "metadata": {"topic": doc_id}},
            )

        response = await async_client.post("/api/v1/rag/search", json={"query": "python"})

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        first = data["results"][0]
        assert first["id"] == "py_chunk_0"
        assert first["content"] == "python python"
        assert first["metadata"] == {"topic": "py"}
        scores = [r["score"] for r in data["results"]]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_search_respects_top_k(self, async_client: AsyncClient):
        for i in range(5):
            await async_client.post(
                "/api/v1/rag/documents", json={"id": f"doc{i}", "content": f"python {i}"}
            )

        response = await async_client.post("/api/v1/rag/search", json={"query": "python"})

        # top_k is 3 in the test settings
        assert response.json()["count"] == 3

    @pytest.mark.asyncio
    async def test_search_empty_store(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/rag/search", json={"query": "python"})

        assert response.status_code == 200
        assert response.json() == {"results": [], "count": 0}

    @pytest.mark.asyncio
    async def test_search_failure(self, async_client: AsyncClient, mock_ollama_client):
        await async_client.post(
            "/api/v1/rag/documents", json={"id": "doc", "content": "python"}
        )
        mock_ollama_client.embed.side_effect = ConnectionError("ollama down")

        response = await async_client.post("/api/v1/rag/search", json={"query": "python"})

        assert response.status_code == 500
        assert response.json()["detail"]["error"]["code"] == "search_error"


class TestImport:
    """Tests for POST /api/v1/rag/import."""

    @pytest.mark.asyncio
    async def test_import_directory(self, async_client: AsyncClient, tmp_path):
        docs = tmp_path / "knowledge"
        docs.mkdir()
        (docs / "python.md").write_text("# Python\npython notes", encoding="utf-8")
        (docs / "rust.md").write_text("# Rust\nrust notes", encoding="utf-8")
        (docs / "skip.txt").write_text("not markdown", encoding="utf-8")

        response = await async_client.post("/api/v1/rag/import", json={"dir": str(docs)})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["document_count"] == 2
        assert [(f["file"], f["status"]) for f in data["files"]] == [
            ("python.md", "loaded"),
            ("rust.md", "loaded"),
        ]

    @pytest.mark.asyncio
    async def test_import_missing_directory(self, async_client: AsyncClient, tmp_path):
        missing = str(tmp_path / "missing")

        response = await async_client.post("/api/v1/rag/import", json={"dir": missing})

        assert response.status_code == 404
        error = response.json()["detail"]["error"]
        assert error["code"] == "directory_not_found"
        assert error["details"] == {"dir": missing}
