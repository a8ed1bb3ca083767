"""LLM provider registry.

Providers are loaded lazily: only the SDK you actually use needs to be installed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from condenser.errors import ProviderNotConfiguredError
from condenser.providers.base import ChatRequest, ChatResponse, LLMProvider, Message, Usage

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "LLMProvider",
    "Message",
    "Usage",
    "get_provider",
    "check_provider_configured",
    "list_providers",
    "PROVIDER_INFO",
]


@dataclass
class ProviderInfo:
    """Metadata about a provider (available before instantiation)."""

    name: str
    description: str
    default_model: str
    free: bool
    api_key_env: str | None  # None means no key needed
    extra: str  # pip extra that installs the SDK


PROVIDER_INFO: dict[str, ProviderInfo] = {
    "claude": ProviderInfo(
        name="claude",
        description="Anthropic Claude",
        default_model="claude-3-5-sonnet-20241022",
        free=False,
        api_key_env="ANTHROPIC_API_KEY",
        extra="claude",
    ),
    "openai": ProviderInfo(
        name="openai",
        description="OpenAI (GPT-4o, etc.)",
        default_model="gpt-4o-mini",
        free=False,
        api_key_env="OPENAI_API_KEY",
        extra="openai",
    ),
    "gemini": ProviderInfo(
        name="gemini",
        description="Google Gemini, generous free tier",
        default_model="gemini-2.0-flash",
        free=True,
        api_key_env="GOOGLE_API_KEY",
        extra="gemini",
    ),
    "groq": ProviderInfo(
        name="groq",
        description="Groq, fast inference, free tier (Llama 3.3, Mixtral)",
        default_model="llama-3.3-70b-versatile",
        free=True,
        api_key_env="GROQ_API_KEY",
        extra="openai",
    ),
    "openrouter": ProviderInfo(
        name="openrouter",
        description="OpenRouter, model aggregator with free options",
        default_model="meta-llama/llama-3.3-70b-instruct:free",
        free=True,
        api_key_env="OPENROUTER_API_KEY",
        extra="openai",
    ),
    "ollama": ProviderInfo(
        name="ollama",
        description="Ollama, local models, completely free, no API key",
        default_model="llama3.1",
        free=True,
        api_key_env=None,
        extra="openai",
    ),
    "siliconflow": ProviderInfo(
        name="siliconflow",
        description="SiliconFlow, hosted Qwen models",
        default_model="Qwen/Qwen2.5-7B-Instruct",
        free=False,
        api_key_env="SILICONFLOW_API_KEY",
        extra="openai",
    ),
    "deepseek": ProviderInfo(
        name="deepseek",
        description="DeepSeek chat and reasoner",
        default_model="deepseek-chat",
        free=False,
        api_key_env="DEEPSEEK_API_KEY",
        extra="openai",
    ),
}


def _unknown(name: str) -> ValueError:
    return ValueError(
        f"Unknown provider '{name}'. Available: {', '.join(PROVIDER_INFO.keys())}"
    )


def is_provider_configured(name: str) -> bool:
    """Return True if the provider's API key is set (or none is needed)."""
    info = PROVIDER_INFO.get(name)
    if info is None:
        raise _unknown(name)
    if info.api_key_env is None:
        return True
    return bool(os.environ.get(info.api_key_env))


def check_provider_configured(name: str) -> None:
    """Raise ``ProviderNotConfiguredError`` if the provider's API key isn't set.

    Call this *before* instantiating the provider so the user gets a clear
    message instead of a cryptic SDK auth failure.
    """
    if not is_provider_configured(name):
        info = PROVIDER_INFO[name]
        raise ProviderNotConfiguredError(
            f"Provider '{info.name}' requires the {info.api_key_env} environment variable, "
            f"but it is not set. Please set it before using this provider."
        )


def _build(name: str, model: str | None) -> LLMProvider:
    if name == "claude":
        from condenser.providers.anthropic import AnthropicProvider
        return AnthropicProvider(model)

    if name == "gemini":
        from condenser.providers.google import GeminiProvider
        return GeminiProvider(model)

    from condenser.providers import openai_compat

    factories = {
        "openai": openai_compat.openai_provider,
        "groq": openai_compat.groq_provider,
        "openrouter": openai_compat.openrouter_provider,
        "ollama": openai_compat.ollama_provider,
        "siliconflow": openai_compat.siliconflow_provider,
        "deepseek": openai_compat.deepseek_provider,
    }
    return factories[name](model)


def get_provider(name: str, model: str | None = None) -> LLMProvider:
    """Instantiate a provider by name.

    Raises ``ProviderNotConfiguredError`` if the required API key isn't set,
    ``ValueError`` for an unknown name, or ``ImportError`` if the required
    SDK isn't installed.
    """
    check_provider_configured(name)
    info = PROVIDER_INFO[name]

    try:
        return _build(name, model)
    except ImportError:
        raise ImportError(
            f"SDK for provider '{name}' not installed. "
            f"Run: pip install paper-condenser[{info.extra}]"
        )


def list_providers() -> list[ProviderInfo]:
    """Return all registered providers."""
    return list(PROVIDER_INFO.values())
