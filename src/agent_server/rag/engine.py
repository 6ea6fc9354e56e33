"""In-memory retrieval engine.

This module provides the RetrievalEngine, which embeds document chunks through
an injected embedding function, answers top-K cosine similarity queries with a
brute-force scan, and renders the best matches into a prompt prefix.
"""

import logging
import threading
from pathlib import Path
from typing import Awaitable, Callable

from agent_server.rag.chunking import DEFAULT_CHUNK_SIZE, split_text
from agent_server.rag.similarity import cosine_similarity
from agent_server.rag.types import Chunk, ImportResult, SearchResult

logger = logging.getLogger(__name__)

EmbeddingFunc = Callable[[str], Awaitable[list[float]]]

CONTEXT_HEADER = (
    "以下是与问题相关的参考资料 (Reference material related to the question):\n\n"
)
CONTEXT_ITEM = "【参考资料 {index}】(相关度 / relevance: {score:.2f})\n{content}\n\n"
CONTEXT_FOOTER = (
    "请基于以上参考资料回答用户问题。如果参考资料中没有相关信息，请明确说明。\n"
    "(Answer based on the references above; say so explicitly if they do not "
    "contain the answer.)\n\n"
)


class RetrievalEngine:
    """Brute-force vector store over embedded text chunks.

    Chunks of one document are embedded before the collection lock is taken
    and published together, so a search sees either all of a document or
    none of it. All stored embeddings share one dimension.

    Attributes:
        chunk_size: Maximum chunk length in characters
        chunk_overlap: Overlap between consecutive chunks in characters
    """

    def __init__(
        self,
        embed_func: EmbeddingFunc,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = 50,
    ) -> None:
        """Initialize the retrieval engine.

        Args:
            embed_func: Async function returning the embedding of a text
            chunk_size: Maximum chunk length in characters
            chunk_overlap: Overlap between consecutive chunks in characters
        """
        self.embed_func = embed_func
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._chunks: tuple[Chunk, ...] = ()
        self._dimension: int | None = None
        self._lock = threading.Lock()

    def split_text(self, text: str) -> list[str]:
        """Split a text with this engine's chunking configuration."""
        return split_text(text, self.chunk_size, self.chunk_overlap)

    async def _embed_chunks(
        self, document_id: str, texts: list[str], metadata: dict[str, str] | None
    ) -> list[Chunk]:
        doc_metadata = dict(metadata or {})
        chunks: list[Chunk] = []
        for i, text in enumerate(texts):
            try:
                embedding = await self.embed_func(text)
            except Exception as e:
                raise RuntimeError(f"Failed to embed chunk {i}: {e}") from e

            chunks.append(
                Chunk(
                    id=f"{document_id}_chunk_{i}",
                    content=text,
                    embedding=tuple(embedding),
                    metadata=doc_metadata,
                )
            )
        return chunks

    def _publish(self, chunks: list[Chunk]) -> None:
        with self._lock:
            dimension = self._dimension
            for chunk in chunks:
                if dimension is None:
                    dimension = len(chunk.embedding)
                elif len(chunk.embedding) != dimension:
                    raise ValueError(
                        f"Embedding dimension mismatch for {chunk.id}: "
                        f"expected {dimension}, got {len(chunk.embedding)}"
                    )
            self._chunks = self._chunks + tuple(chunks)
            self._dimension = dimension

    async def add_document(
        self, document_id: str, text: str, metadata: dict[str, str] | None = None
    ) -> int:
        """Split a document into chunks, embed and store them.

        Args:
            document_id: The document ID, used as chunk ID prefix
            text: The document text
            metadata: Metadata copied onto every chunk

        Returns:
            int: Number of chunks stored

        Raises:
            RuntimeError: If embedding a chunk fails (nothing is stored)
            ValueError: If the embedding dimension does not match the store
        """
        texts = self.split_text(text)
        chunks = await self._embed_chunks(document_id, texts, metadata)
        self._publish(chunks)

        logger.info(f"Document added: id={document_id}, chunks={len(chunks)}")
        return len(chunks)

    async def add_document_with_chunks(
        self,
        document_id: str,
        chunks: list[str],
        metadata: dict[str, str] | None = None,
    ) -> int:
        """Embed and store a document that is already split into chunks.

        Args:
            document_id: The document ID, used as chunk ID prefix
            chunks: The chunk texts, stored as given
            metadata: Metadata copied onto every chunk

        Returns:
            int: Number of chunks stored
        """
        logger.info(
            f"Adding document with pre-split chunks: id={document_id}, chunks={len(chunks)}"
        )
        embedded = await self._embed_chunks(document_id, chunks, metadata)
        self._publish(embedded)
        return len(embedded)

    async def search(self, query: str, top_k: int) -> list[SearchResult]:
        """Find the chunks most similar to a query.

        Args:
            query: The query text
            top_k: Maximum number of results; clamped to the chunk count

        Returns:
            list[SearchResult]: Results ordered by descending score
        """
        chunks = self._chunks
        if not chunks or top_k <= 0:
            return []

        query_embedding = await self.embed_func(query)

        results = [
            SearchResult(chunk=chunk, score=cosine_similarity(query_embedding, chunk.embedding))
            for chunk in chunks
        ]
        results.sort(key=lambda r: r.score, reverse=True)

        top_k = min(top_k, len(results))
        logger.debug(
            f"Search completed: total_chunks={len(chunks)}, top_k={top_k}, "
            f"top_score={results[0].score:.4f}"
        )
        return results[:top_k]

    async def get_context(self, query: str, top_k: int) -> str:
        """Render the top search results as a prompt prefix.

        Returns:
            str: The rendered context, or "" when nothing matches
        """
        results = await self.search(query, top_k)
        if not results:
            return ""

        parts = [CONTEXT_HEADER]
        for i, result in enumerate(results, start=1):
            parts.append(
                CONTEXT_ITEM.format(index=i, score=result.score, content=result.chunk.content)
            )
        parts.append(CONTEXT_FOOTER)
        return "".join(parts)

    def document_count(self) -> int:
        """Number of stored chunks."""
        return len(self._chunks)

    def clear(self) -> None:
        """Remove every stored chunk."""
        with self._lock:
            self._chunks = ()
            self._dimension = None
        logger.info("Retrieval store cleared")

    async def import_directory(self, directory: str | Path) -> list[ImportResult]:
        """Add every ``.md`` file of a directory as a document.

        The scan is not recursive. The file name without extension is the
        document ID. A file that cannot be read or embedded is logged and
        recorded as failed; the remaining files are still imported.

        Args:
            directory: The directory to scan

        Returns:
            list[ImportResult]: One result per markdown file

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If the path is not a directory
        """
        path = Path(directory)
        if not path.exists():
            raise FileNotFoundError(f"Directory not found: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")

        results: list[ImportResult] = []
        for file_path in sorted(path.iterdir()):
            if not file_path.is_file() or file_path.suffix != ".md":
                continue

            document_id = file_path.stem
            try:
                content = file_path.read_text(encoding="utf-8")
                chunk_count = await self.add_document(
                    document_id,
                    content,
                    {"source": str(file_path), "file": file_path.name},
                )
            except Exception as e:
                logger.error(f"Failed to load document {file_path}: {e}")
                results.append(
                    ImportResult(
                        file=file_path.name,
                        document_id=document_id,
                        status="failed",
                        reason=str(e),
                    )
                )
                continue

            results.append(
                ImportResult(
                    file=file_path.name,
                    document_id=document_id,
                    status="loaded",
                    chunks=chunk_count,
                )
            )

        loaded = sum(1 for r in results if r.status == "loaded")
        logger.info(
            f"Documents loaded from {path}: files={loaded}, "
            f"total_chunks={self.document_count()}"
        )
        return results
