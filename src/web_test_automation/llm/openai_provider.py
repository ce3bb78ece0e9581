"""
OpenAI-compatible LLM Provider.

Supports any OpenAI-compatible chat completions API including:
- OpenAI
- Azure OpenAI (through a compatible gateway)
- Local servers (LM Studio, Ollama, etc.)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from web_test_automation.interfaces.llm import (
    ILLMProvider,
    Message,
    LLMResponse,
    Usage,
)
from web_test_automation.exceptions.llm import (
    InvalidResponseError,
    LLMAuthenticationError,
    LLMConnectionError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class OpenAIProvider(ILLMProvider):
    """
    OpenAI-compatible LLM provider.

    Example:
        >>> provider = OpenAIProvider(
        ...     base_url="https://api.openai.com",
        ...     model="gpt-3.5-turbo",
        ...     api_key="sk-...",
        ... )
        >>> response = await provider.complete([Message.user("Hello!")])
    """

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the provider.

        Args:
            base_url: Base URL for the API (no /v1 suffix needed)
            model: Model to use for completions
            api_key: API key sent as a bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        if self._base_url.endswith("/v1"):
            self._base_url = self._base_url[:-3]
        self._model = model

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a completion."""
        model = model or self._model

        body: Dict[str, Any] = {
            "model": model,
            "messages": [msg.to_dict() for msg in messages],
            "temperature": temperature,
        }
        if max_tokens:
            body["max_tokens"] = max_tokens
        body.update(kwargs)

        logger.debug(f"Calling OpenAI API: {model}")

        try:
            response = await self._client.post("/v1/chat/completions", json=body)
        except httpx.HTTPError as e:
            logger.error(f"Error calling OpenAI API: {e}")
            raise LLMConnectionError(f"OpenAI API request failed: {e}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("retry-after")
            raise RateLimitError(
                f"TooManyRequests - Rate limit exceeded. Error: {response.text}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if response.status_code in (401, 403):
            raise LLMAuthenticationError(
                f"OpenAI API rejected the credentials: {response.status_code}",
                {"status_code": response.status_code},
            )
        if response.is_error:
            logger.error(f"HTTP error: {response.status_code} - {response.text}")
            raise LLMConnectionError(
                f"OpenAI API call failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
            choice = data["choices"][0]
            message = choice["message"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise InvalidResponseError(
                f"Unexpected response shape from OpenAI API: {e}",
                raw_response=response.text,
            ) from e

        usage_data = data.get("usage") or {}
        usage = Usage(
            prompt_tokens=usage_data.get("prompt_tokens", 0),
            completion_tokens=usage_data.get("completion_tokens", 0),
            total_tokens=usage_data.get("total_tokens", 0),
        )

        return LLMResponse(
            content=message.get("content") or "",
            model=data.get("model", model),
            usage=usage,
            finish_reason=choice.get("finish_reason") or "stop",
            raw_response=data,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
