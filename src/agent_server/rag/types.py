"""Data types for the retrieval engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Chunk:
    """An embedded piece of a document.

    Attributes:
        id: "<document id>_chunk_<index>"
        content: The chunk text
        embedding: The embedding vector of the text
        metadata: Metadata inherited from the parent document
    """

    id: str
    content: str
    embedding: tuple[float, ...]
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class SearchResult:
    """A chunk paired with its similarity to a query."""

    chunk: Chunk
    score: float


@dataclass
class ImportResult:
    """Outcome of importing one file from a documents directory.

    Attributes:
        file: The file name
        document_id: The document ID derived from the file name
        status: "loaded" or "failed"
        chunks: Number of chunks stored
        reason: Why the file failed to load
    """

    file: str
    document_id: str
    status: str
    chunks: int = 0
    reason: str | None = None
