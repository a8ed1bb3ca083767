"""OpenAI-compatible provider, covers OpenAI, Groq, OpenRouter, Ollama, SiliconFlow and DeepSeek."""

from __future__ import annotations

import os

from condenser.providers.base import ChatRequest, ChatResponse, LLMProvider, Usage


class OpenAICompatProvider(LLMProvider):
    """Generic provider for any OpenAI-compatible chat completions API."""

    def __init__(
        self,
        name: str,
        default_model: str,
        model: str | None = None,
        base_url: str | None = None,
        api_key_env: str | None = None,
        api_key: str | None = None,
    ) -> None:
        from openai import AsyncOpenAI

        self.name = name
        self.default_model = default_model
        super().__init__(model)

        resolved_key = api_key or (os.environ.get(api_key_env) if api_key_env else None)

        self._client = AsyncOpenAI(
            base_url=base_url,
            api_key=resolved_key or "not-needed",
        )

    async def chat(self, request: ChatRequest) -> ChatResponse:
        resp = await self._client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens_for(request),
            temperature=request.temperature,
            messages=[{"role": m.role, "content": m.content} for m in request.messages],
        )
        usage = None
        if resp.usage is not None:
            usage = Usage(
                prompt_tokens=resp.usage.prompt_tokens,
                completion_tokens=resp.usage.completion_tokens,
                total_tokens=resp.usage.total_tokens,
            )
        return ChatResponse(content=resp.choices[0].message.content or "", usage=usage)


# ── Pre-configured provider factories ──────────────────────────────────────


def openai_provider(model: str | None = None) -> OpenAICompatProvider:
    """OpenAI (GPT-4o, etc.)"""
    return OpenAICompatProvider(
        name="openai",
        default_model="gpt-4o-mini",
        model=model,
        api_key_env="OPENAI_API_KEY",
    )


def groq_provider(model: str | None = None) -> OpenAICompatProvider:
    """Groq, fast inference, free tier (Llama, Mixtral)."""
    return OpenAICompatProvider(
        name="groq",
        default_model="llama-3.3-70b-versatile",
        model=model,
        base_url="https://api.groq.com/openai/v1",
        api_key_env="GROQ_API_KEY",
    )


def openrouter_provider(model: str | None = None) -> OpenAICompatProvider:
    """OpenRouter, model aggregator with free options."""
    return OpenAICompatProvider(
        name="openrouter",
        default_model="meta-llama/llama-3.3-70b-instruct:free",
        model=model,
        base_url="https://openrouter.ai/api/v1",
        api_key_env="OPENROUTER_API_KEY",
    )


def ollama_provider(model: str | None = None) -> OpenAICompatProvider:
    """Ollama, local models, completely free."""
    return OpenAICompatProvider(
        name="ollama",
        default_model="llama3.1",
        model=model,
        base_url="http://localhost:11434/v1",
        api_key_env=None,
    )


def siliconflow_provider(model: str | None = None) -> OpenAICompatProvider:
    """SiliconFlow, hosted Qwen and other open models."""
    return OpenAICompatProvider(
        name="siliconflow",
        default_model="Qwen/Qwen2.5-7B-Instruct",
        model=model,
        base_url="https://api.siliconflow.cn/v1",
        api_key_env="SILICONFLOW_API_KEY",
    )


def deepseek_provider(model: str | None = None) -> OpenAICompatProvider:
    """DeepSeek chat and reasoner models."""
    return OpenAICompatProvider(
        name="deepseek",
        default_model="deepseek-chat",
        model=model,
        base_url="https://api.deepseek.com/v1",
        api_key_env="DEEPSEEK_API_KEY",
    )
