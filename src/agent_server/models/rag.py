"""Pydantic models for the retrieval API."""

from pydantic import BaseModel, Field


class AddDocumentRequest(BaseModel):
    """Request body for POST /api/v1/rag/documents.

    Either ``content`` (split automatically) or ``chunks`` (stored as given)
    must be provided. ``chunks`` wins when both are present.
    """

    id: str = Field(min_length=1, description="Document identifier")
    content: str | None = Field(default=None, description="Full document text")
    chunks: list[str] | None = Field(default=None, description="Pre-split chunks")
    metadata: dict[str, str] | None = Field(
        default=None, description="Metadata copied onto every chunk"
    )


class DocumentCountResponse(BaseModel):
    """Response for operations that change the document collection."""

    success: bool = Field(description="Whether the operation succeeded")
    document_count: int = Field(description="Number of stored chunks")


class SearchRequest(BaseModel):
    """Request body for POST /api/v1/rag/search."""

    query: str = Field(min_length=1, description="Query text")


class SearchResultItem(BaseModel):
    """One chunk returned by a search."""

    id: str = Field(description="Chunk identifier")
    content: str = Field(description="Chunk text")
    score: float = Field(description="Cosine similarity to the query")
    metadata: dict[str, str] | None = Field(default=None, description="Chunk metadata")


class SearchResponse(BaseModel):
    """Response body for POST /api/v1/rag/search."""

    results: list[SearchResultItem] = Field(description="Results by descending score")
    count: int = Field(description="Number of results")


class ImportRequest(BaseModel):
    """Request body for POST /api/v1/rag/import."""

    dir: str = Field(min_length=1, description="Directory containing .md files")


class ImportFileResult(BaseModel):
    """Outcome for one imported file."""

    file: str
    document_id: str
    status: str
    chunks: int = 0
    reason: str | None = None


class ImportResponse(DocumentCountResponse):
    """Response body for POST /api/v1/rag/import."""

    files: list[ImportFileResult] = Field(
        default_factory=list, description="Per-file import results"
    )
