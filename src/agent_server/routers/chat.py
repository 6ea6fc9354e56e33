"""Chat API endpoints.

This module provides the endpoints that run the agent turn loop, with and
without retrieval-augmented context.
"""

import asyncio
import logging
from typing import Awaitable

from fastapi import APIRouter, Depends, HTTPException, Request

from agent_server.agent import (
    Agent,
    ChatResult,
    MaxIterationsError,
    ModelUnavailableError,
)
from agent_server.dependencies import get_agent
from agent_server.models.chat import ChatRequest, ChatResponse, ToolCallResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def _error_detail(code: str, message: str, details: dict | None = None) -> dict:
    return {"error": {"code": code, "message": message, "details": details or {}}}


async def _run_chat(
    request: Request, chat_call: Awaitable[ChatResult], conversation_id: str | None
) -> ChatResponse:
    """Await a chat call and map agent errors to HTTP errors.

    Args:
        request: FastAPI request object, used for the timeout setting
        chat_call: The pending Agent.chat or Agent.chat_with_retrieval call
        conversation_id: Conversation ID from the request, for error details

    Returns:
        ChatResponse built from the chat result

    Raises:
        HTTPException: 502 if the model is unavailable, 500 if the iteration
                       cap is reached, 504 on timeout
    """
    timeout = request.app.state.settings.chat_timeout
    details = {"conversation_id": conversation_id} if conversation_id else {}

    try:
        result = await asyncio.wait_for(chat_call, timeout=timeout)
    except ModelUnavailableError as e:
        raise HTTPException(
            status_code=502,
            detail=_error_detail("ollama_error", str(e), details),
        )
    except MaxIterationsError as e:
        raise HTTPException(
            status_code=500,
            detail=_error_detail("max_iterations", str(e), details),
        )
    except asyncio.TimeoutError:
        logger.error(f"Chat request timed out after {timeout}s")
        raise HTTPException(
            status_code=504,
            detail=_error_detail(
                "timeout", f"Chat request timed out after {timeout}s", details
            ),
        )

    tool_calls = [
        ToolCallResponse.model_validate(record) for record in result.tool_calls
    ]
    return ChatResponse(
        response=result.response,
        tool_calls=tool_calls or None,
        conversation_id=result.conversation_id,
    )


@router.post("", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(
    request_body: ChatRequest,
    request: Request,
    agent: Agent = Depends(get_agent),
) -> ChatResponse:
    """Send a message and receive the agent's final answer.

    The agent may call any registered tools before answering; every call is
    listed in ``tool_calls``.
    """
    logger.info(f"Received chat request for conversation {request_body.conversation_id}")
    return await _run_chat(
        request,
        agent.chat(
            request_body.message,
            conversation_id=request_body.conversation_id,
            model=request_body.model,
        ),
        request_body.conversation_id,
    )


@router.post("/rag", response_model=ChatResponse, response_model_exclude_none=True)
async def chat_with_retrieval(
    request_body: ChatRequest,
    request: Request,
    agent: Agent = Depends(get_agent),
) -> ChatResponse:
    """Like POST /api/v1/chat, with relevant document chunks prepended."""
    logger.info(
        f"Received retrieval chat request for conversation {request_body.conversation_id}"
    )
    return await _run_chat(
        request,
        agent.chat_with_retrieval(
            request_body.message,
            conversation_id=request_body.conversation_id,
            model=request_body.model,
        ),
        request_body.conversation_id,
    )
