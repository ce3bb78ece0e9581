"""
LLM Provider Interface - Abstract base class for chat-completion backends.

The prompt parser only needs a single round-trip: send a system prompt and
the user's instruction, get text back.

Example:
    >>> from web_test_automation.llm import OpenAIProvider
    >>> provider = OpenAIProvider(base_url="https://api.openai.com", model="gpt-3.5-turbo")
    >>> response = await provider.complete([Message.user("Hello")])
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class MessageRole(Enum):
    """Role of a message in the conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """
    A message in the LLM conversation.
    
    Attributes:
        role: The role of the message sender
        content: The text content of the message
    """
    role: MessageRole
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        """Create a system message."""
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        """Create a user message."""
        return cls(role=MessageRole.USER, content=content)

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class Usage:
    """
    Token usage information from an LLM response.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class LLMResponse:
    """
    Response from an LLM completion request.
    
    Attributes:
        content: The text content of the response
        model: The model that generated the response
        usage: Token usage information
        finish_reason: Reason the completion finished ('stop', 'length')
        raw_response: The decoded JSON body from the provider
    """
    content: str
    model: str
    usage: Usage
    finish_reason: str = "stop"
    raw_response: Any = None


class ILLMProvider(ABC):
    """
    Abstract interface for LLM providers.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'openai')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when ``complete`` is not given one."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """
        Generate a completion for the given messages.
        
        Raises:
            LLMConnectionError: If the request fails
            LLMAuthenticationError: If the key is rejected
            RateLimitError: If rate limited
            InvalidResponseError: If the body cannot be understood
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...
