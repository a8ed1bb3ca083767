"""Anthropic (Claude) provider."""

from __future__ import annotations

from condenser.providers.base import ChatRequest, ChatResponse, LLMProvider, Usage


class AnthropicProvider(LLMProvider):
    name = "claude"
    default_model = "claude-3-5-sonnet-20241022"
    default_max_tokens = 8192

    def __init__(self, model: str | None = None) -> None:
        import anthropic

        super().__init__(model)
        self._client = anthropic.AsyncAnthropic()

    async def chat(self, request: ChatRequest) -> ChatResponse:
        kwargs = {}
        if request.system:
            kwargs["system"] = request.system

        msg = await self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens_for(request),
            temperature=request.temperature,
            messages=[{"role": m.role, "content": m.content} for m in request.conversation],
            **kwargs,
        )
        text = "".join(block.text for block in msg.content if block.type == "text")
        usage = None
        if msg.usage is not None:
            usage = Usage(
                prompt_tokens=msg.usage.input_tokens,
                completion_tokens=msg.usage.output_tokens,
                total_tokens=msg.usage.input_tokens + msg.usage.output_tokens,
            )
        return ChatResponse(content=text, usage=usage)
