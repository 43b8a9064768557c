"""
Ollama chat API client
"""
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel

from topicqa.core.config import get_settings
from topicqa.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


class ChatMessage(BaseModel):
    """A single chat message in Ollama format"""
    role: str
    content: Optional[str] = None


class ChatResponse(BaseModel):
    """Reply of POST /api/chat (non-streaming)"""
    model: Optional[str] = None
    message: ChatMessage
    done: bool = False


class OllamaError(Exception):
    """Custom exception for Ollama errors"""
    pass


def normalize_base_url(url: str) -> str:
    """Strip a trailing /v1 (OpenAI-compatible prefix); the native API lives at the root"""
    url = url.strip()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = f"http://{url}"
    url = url.rstrip("/")
    if url.endswith("/v1"):
        url = url[:-3]
    return url


class OllamaClient:
    """
    Client for the Ollama chat endpoint.

    One `httpx.AsyncClient` is shared by all requests so concurrent
    calls reuse the connection pool. Calls are never retried.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if base_url is None:
            settings = get_settings()
            base_url = settings.ollama_url
            timeout = settings.llm_timeout_seconds if timeout is None else timeout
        self.base_url = normalize_base_url(base_url)
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                limits=httpx.Limits(
                    max_keepalive_connections=5,
                    max_connections=20,
                ),
            )
        return self._client

    async def chat(self, model: str, messages: List[Dict[str, str]]) -> ChatResponse:
        """
        Send a chat completion request.

        Args:
            model: Model name, e.g. "deepseek-r1:8b"
            messages: Messages in Ollama format ({"role": ..., "content": ...})

        Returns:
            ChatResponse; `message.content` may be None or empty

        Raises:
            OllamaError: on transport errors, non-2xx status, or a reply
                without a `message` object
        """
        payload: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": False,
        }

        logger.debug(
            "Sending chat request",
            extra={"model": model, "ollama_url": self.base_url},
        )

        try:
            response = await self._get_client().post("/api/chat", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise OllamaError(f"Request to {self.base_url} timed out") from e
        except httpx.HTTPStatusError as e:
            raise OllamaError(
                f"HTTP error from {self.base_url}: {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise OllamaError(f"Error calling Ollama at {self.base_url}: {e}") from e
        except ValueError as e:
            raise OllamaError(f"Invalid JSON from {self.base_url}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("message"), dict):
            raise OllamaError(f"Unexpected reply from {self.base_url}: missing 'message'")

        content = data["message"].get("content")
        return ChatResponse(
            model=data.get("model"),
            message=ChatMessage(
                role=data["message"].get("role") or "assistant",
                content=content if isinstance(content, str) else None,
            ),
            done=bool(data.get("done", False)),
        )

    async def health_check(self) -> bool:
        """Check if the Ollama server answers /api/tags"""
        try:
            response = await self._get_client().get("/api/tags", timeout=5.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self):
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
