"""Retrieval-augmented generation support.

This package provides text chunking, cosine similarity and the in-memory
retrieval engine used to inject relevant document chunks into prompts.
"""

from agent_server.rag.chunking import split_text
from agent_server.rag.engine import RetrievalEngine
from agent_server.rag.similarity import cosine_similarity
from agent_server.rag.types import Chunk, ImportResult, SearchResult

__all__ = [
    "Chunk",
    "ImportResult",
    "RetrievalEngine",
    "SearchResult",
    "cosine_similarity",
    "split_text",
]
