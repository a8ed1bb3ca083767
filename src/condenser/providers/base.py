"""Abstract base for LLM chat providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class Message:
    role: str  # "system", "user" or "assistant"
    content: str


@dataclass
class Usage:
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class ChatRequest:
    messages: list[Message] = field(default_factory=list)
    temperature: float = 0.3
    max_tokens: int | None = None  # None means the provider's ceiling

    @property
    def system(self) -> str:
        """All system messages joined, for SDKs that take them separately."""
        return "\n\n".join(m.content for m in self.messages if m.role == "system")

    @property
    def conversation(self) -> list[Message]:
        """The non-system messages, in order."""
        return [m for m in self.messages if m.role != "system"]


@dataclass
class ChatResponse:
    content: str
    usage: Usage | None = None


class LLMProvider(ABC):
    """Interface that all LLM providers must implement."""

    name: str
    default_model: str
    default_max_tokens: int = 4096

    def __init__(self, model: str | None = None) -> None:
        self.model = self.get_model(model)

    @abstractmethod
    async def chat(self, request: ChatRequest) -> ChatResponse:
        """Send the request and return the full response."""

    def get_model(self, model: str | None) -> str:
        """Return the requested model or the provider's default."""
        return model or self.default_model

    def max_tokens_for(self, request: ChatRequest) -> int:
        return request.max_tokens or self.default_max_tokens
