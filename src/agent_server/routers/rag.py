"""Retrieval API endpoints for adding, importing, searching and clearing documents."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from agent_server.agent import Agent
from agent_server.dependencies import get_agent
from agent_server.models.rag import (
    AddDocumentRequest,
    DocumentCountResponse,
    ImportFileResult,
    ImportRequest,
    ImportResponse,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/rag", tags=["rag"])


@router.post("/documents", response_model=DocumentCountResponse)
async def add_document(
    request_body: AddDocumentRequest,
    agent: Agent = Depends(get_agent),
) -> DocumentCountResponse:
    """Add a document, either as full text or as pre-split chunks.

    Raises:
        HTTPException: 400 if neither content nor chunks is given, 500 if
                       embedding fails
    """
    if not request_body.chunks and not request_body.content:
        raise HTTPException(
            status_code=400,
            detail={
                "error": {
                    "code": "missing_content",
                    "message": "Content or chunks is required",
                    "details": {"id": request_body.id},
                }
            },
        )

    try:
        if request_body.chunks:
            await agent.add_document_chunks(
                request_body.id, request_body.chunks, request_body.metadata
            )
        else:
            await agent.add_document(
                request_body.id, request_body.content or "", request_body.metadata
            )
    except Exception as e:
        logger.error(f"Failed to add document {request_body.id}: {e}")
        raise HTTPException(
            status_code=500,
            detail={
                "error": {
                    "code": "document_add_error",
                    "message": f"Failed to add document: {str(e)}",
                    "details": {"id": request_body.id},
                }
            },
        )

    return DocumentCountResponse(success=True, document_count=agent.document_count())


@router.delete("/documents", response_model=DocumentCountResponse)
async def clear_documents(agent: Agent = Depends(get_agent)) -> DocumentCountResponse:
    """Remove every stored document chunk."""
    agent.clear_documents()
    return DocumentCountResponse(success=True, document_count=agent.document_count())


@router.post("/search", response_model=SearchResponse, response_model_exclude_none=True)
async def search_documents(
    request_body: SearchRequest,
    agent: Agent = Depends(get_agent),
) -> SearchResponse:
    """Search the stored chunks for the configured top-K matches.

    Raises:
        HTTPException: 500 if embedding the query fails
    """
    try:
        results = await agent.search_documents(request_body.query)
    except Exception as e:
        logger.error(f"Failed to search documents: {e}")
        raise HTTPException(
            status_code=500,
            detail={
                "error": {
                    "code": "search_error",
                    "message": f"Failed to search documents: {str(e)}",
                    "details": {},
                }
            },
        )

    items = [
        SearchResultItem(
            id=result.chunk.id,
            content=result.chunk.content,
            score=result.score,
            metadata=result.chunk.metadata or None,
        )
        for result in results
    ]
    return SearchResponse(results=items, count=len(items))


@router.post("/import", response_model=ImportResponse)
async def import_documents(
    request_body: ImportRequest,
    agent: Agent = Depends(get_agent),
) -> ImportResponse:
    """Import every .md file of a directory (non-recursive).

    Files that fail to load are reported in ``files`` and do not abort the
    import.

    Raises:
        HTTPException: 404 if the directory does not exist
    """
    logger.info(f"Importing documents from directory {request_body.dir}")

    try:
        results = await agent.import_documents(request_body.dir)
    except (FileNotFoundError, NotADirectoryError) as e:
        raise HTTPException(
            status_code=404,
            detail={
                "error": {
                    "code": "directory_not_found",
                    "message": str(e),
                    "details": {"dir": request_body.dir},
                }
            },
        )

    files = [
        ImportFileResult(
            file=r.file,
            document_id=r.document_id,
            status=r.status,
            chunks=r.chunks,
            reason=r.reason,
        )
        for r in results
    ]
    return ImportResponse(
        success=True, document_count=agent.document_count(), files=files
    )
