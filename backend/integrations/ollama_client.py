"""
Ollama REST API client.
Wraps the OpenAI-compatible POST /v1/chat/completions endpoint (non-streamed).
"""
import logging
from typing import Optional, Sequence

import httpx

from config import settings
from core.errors import UpstreamServiceError
from models.chat import ChatMessage

logger = logging.getLogger(__name__)


class OllamaClient:
    """Thin async client for the Ollama local LLM server. One attempt per call, no retries."""

    def __init__(
        self,
        host: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.host = (host or settings.OLLAMA_HOST).rstrip("/")
        self.model = model or settings.OLLAMA_MODEL
        self.timeout = timeout if timeout is not None else settings.OLLAMA_TIMEOUT_SECONDS
        self.temperature = settings.OLLAMA_TEMPERATURE
        self._client = httpx.AsyncClient(base_url=self.host, timeout=self.timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def is_healthy(self) -> tuple[bool, Optional[str]]:
        """Returns (True, model_name) if Ollama is reachable, (False, error) otherwise."""
        try:
            resp = await self._client.get("/api/version", timeout=5)
            resp.raise_for_status()
            return True, self.model
        except httpx.HTTPError as e:
            return False, str(e)

    async def chat(self, messages: Sequence[ChatMessage]) -> str:
        """
        Send the whole conversation and return the first choice's content verbatim.
        The content is not interpreted here.
        """
        payload = {
            "model": self.model,
            "messages": [m.model_dump() for m in messages],
            "stream": False,
            "temperature": self.temperature,
        }
        try:
            resp = await self._client.post("/v1/chat/completions", json=payload)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("Ollama chat timed out after %ss", self.timeout)
            raise UpstreamServiceError(f"Inference service timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            logger.warning("Ollama chat returned %d", e.response.status_code)
            raise UpstreamServiceError(
                f"Inference service returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Ollama chat failed: %s", e)
            raise UpstreamServiceError(f"Inference service unreachable: {e}") from e

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamServiceError("Malformed response from inference service") from e
        if not isinstance(content, str):
            raise UpstreamServiceError("Malformed response from inference service")

        logger.debug("Ollama response length: %d chars", len(content))
        return content
