"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient for
communicating with the Ollama API. The client is created once at startup and
shared by the turn loop (chat) and the retrieval engine (embeddings).
"""

import logging
from typing import Any

import ollama

logger = logging.getLogger(__name__)


def _to_dict(obj: Any) -> dict[str, Any]:
    """Convert an ollama response object to a plain dict."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    if isinstance(obj, dict):
        return obj
    return vars(obj)


class OllamaClient:
    """Async client for interacting with Ollama API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        max_retries: Extra attempts for a chat request that fails to connect
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(
        self, host: str, timeout: float | None = None, max_retries: int = 0
    ) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            timeout: Request timeout in seconds (None disables it)
            max_retries: Extra attempts for chat requests on connection errors
        """
        self.host = host
        self.max_retries = max(0, max_retries)
        self._client = ollama.AsyncClient(host=host, timeout=timeout)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def list_models(self) -> list[str]:
        """List the names of all locally available models.

        Raises:
            Exception: If the Ollama API request fails
        """
        try:
            response = await self._client.list()
        except Exception as e:
            logger.error(f"Failed to list models: {e}")
            raise

        if hasattr(response, "models"):
            models_list = response.models
        else:
            models_list = response.get("models", [])

        names: list[str] = []
        for model_obj in models_list:
            if isinstance(model_obj, dict):
                name = model_obj.get("model") or model_obj.get("name")
            else:
                name = getattr(model_obj, "model", None) or getattr(
                    model_obj, "name", None
                )
            if name:
                names.append(name)

        logger.debug(f"Retrieved {len(names)} models from Ollama")
        return names

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Send a non-streaming chat request with optional tool descriptors.

        Args:
            model: The model name to use for the chat
            messages: Message dicts in Ollama format
            tools: Tool descriptors in Ollama function-calling format

        Returns:
            dict: The complete response. ``response["message"]`` holds the
                  assistant message with ``content`` and optional ``tool_calls``.

        Raises:
            ConnectionError: If Ollama stays unreachable after all retries
            ollama.ResponseError: If Ollama rejects the request
        """
        attempt = 0
        while True:
            try:
                logger.debug(
                    f"Chat request: model={model}, messages={len(messages)}, "
                    f"tools={len(tools or [])}"
                )
                response = await self._client.chat(
                    model=model,
                    messages=messages,
                    tools=tools or None,
                    stream=False,
                )
                response_dict = _to_dict(response)
                message = response_dict.get("message") or {}
                logger.debug(
                    f"Chat response: content_length={len(message.get('content') or '')}, "
                    f"tool_calls={len(message.get('tool_calls') or [])}"
                )
                return response_dict

            except ConnectionError as e:
                if attempt >= self.max_retries:
                    logger.error(f"Chat failed after {attempt + 1} attempts: {e}")
                    raise
                attempt += 1
                logger.warning(
                    f"Chat connection failed, retrying ({attempt}/{self.max_retries}): {e}"
                )
            except Exception as e:
                logger.error(f"Chat request failed: {e}")
                raise

    async def embed(self, model: str, text: str) -> list[float]:
        """Generate the embedding vector for a text.

        Args:
            model: The embedding model name
            text: The text to embed

        Returns:
            list[float]: The embedding vector

        Raises:
            ValueError: If Ollama returns no embedding
        """
        logger.debug(f"Embed request: model={model}, input_length={len(text)}")

        try:
            response = await self._client.embed(model=model, input=text)
        except Exception as e:
            logger.error(f"Embed request failed: {e}")
            raise

        embeddings = _to_dict(response).get("embeddings") or []
        if not embeddings:
            raise ValueError(f"Ollama returned no embedding for model {model}")

        embedding = [float(v) for v in embeddings[0]]
        logger.debug(f"Embed response: model={model}, dimension={len(embedding)}")
        return embedding

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient uses httpx internally which handles cleanup.
        """
        logger.debug("OllamaClient closed")
