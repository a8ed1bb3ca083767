"""Shared fixtures: a scripted LLM provider and a section factory.

The fake provider's model name is unknown to tiktoken, so every token count
in the tests comes from the ``ceil(len / 4)`` estimate.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from condenser.models import Section, SectionType
from condenser.providers import ChatRequest, ChatResponse, LLMProvider, Usage

FAKE_MODEL = "fake-model"


class FakeProvider(LLMProvider):
    """Records every request and answers from a script."""

    name = "fake"
    default_model = FAKE_MODEL

    def __init__(self, model: str | None = None) -> None:
        super().__init__(model)
        self.requests: list[ChatRequest] = []
        self.reply = "compressed text"
        self.responder: Callable[[ChatRequest], str] | None = None
        self.fail_with: Exception | None = None
        self.delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0

    async def chat(self, request: ChatRequest) -> ChatResponse:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_with is not None:
                raise self.fail_with
            content = self.responder(request) if self.responder else self.reply
        finally:
            self.in_flight -= 1
        return ChatResponse(content=content, usage=Usage(10, 5, 15))

    @property
    def system_prompts(self) -> list[str]:
        return [r.system for r in self.requests]


@pytest.fixture
def fake_llm() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def make_section() -> Callable[..., Section]:
    """Build a section whose content is exactly ``tokens`` estimated tokens."""

    def factory(
        section_type: SectionType,
        tokens: int,
        title: str | None = None,
        char: str = "x",
    ) -> Section:
        return Section(
            type=section_type,
            title=title or section_type.value.replace("_", " ").title(),
            content=char * (tokens * 4),
            start_line=0,
            end_line=1,
            token_count=tokens,
        )

    return factory
