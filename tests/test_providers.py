"""Tests for the provider registry, request model and model limits."""

import pytest

from condenser.errors import ProviderNotConfiguredError
from condenser.model_info import (
    KNOWN_MODELS,
    ModelInfo,
    available_input_tokens,
    get_model_info,
)
from condenser.providers import (
    PROVIDER_INFO,
    ChatRequest,
    Message,
    check_provider_configured,
    get_provider,
    list_providers,
)


class TestRegistry:
    def test_all_providers_listed(self):
        names = {info.name for info in list_providers()}
        assert names == {
            "claude",
            "openai",
            "gemini",
            "groq",
            "openrouter",
            "ollama",
            "siliconflow",
            "deepseek",
        }

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("nope")

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ProviderNotConfiguredError, match="OPENAI_API_KEY"):
            check_provider_configured("openai")

    def test_gemini_configuration_decided_by_registry(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        with pytest.raises(ProviderNotConfiguredError, match="GOOGLE_API_KEY"):
            check_provider_configured("gemini")
        monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
        check_provider_configured("gemini")

    def test_ollama_needs_no_key(self):
        assert PROVIDER_INFO["ollama"].api_key_env is None
        check_provider_configured("ollama")

    def test_model_override(self):
        pytest.importorskip("openai")
        provider = get_provider("ollama", "llama3.2")
        assert provider.name == "ollama"
        assert provider.model == "llama3.2"

    def test_default_model(self, monkeypatch):
        pytest.importorskip("openai")
        monkeypatch.setenv("SILICONFLOW_API_KEY", "sk-test")
        provider = get_provider("siliconflow")
        assert provider.model == "Qwen/Qwen2.5-7B-Instruct"


class TestChatRequest:
    def test_system_and_conversation_split(self):
        request = ChatRequest(
            messages=[
                Message("system", "rule one"),
                Message("user", "hi"),
                Message("system", "rule two"),
                Message("assistant", "hello"),
            ]
        )
        assert request.system == "rule one\n\nrule two"
        assert [m.role for m in request.conversation] == ["user", "assistant"]

    def test_defaults(self):
        request = ChatRequest()
        assert request.temperature == 0.3
        assert request.max_tokens is None


class TestModelInfo:
    def test_known_model(self):
        info = get_model_info("deepseek-chat")
        assert info.max_context_tokens == 131072
        assert info.max_output_tokens == 8192

    def test_unknown_model_warns(self, caplog):
        info = get_model_info("mystery-model")
        assert (info.max_context_tokens, info.max_output_tokens) == (32768, 4096)
        assert "mystery-model" in caplog.text

    def test_provider_defaults_are_known_where_listed(self):
        for name in ("claude", "openai", "siliconflow", "deepseek"):
            assert PROVIDER_INFO[name].default_model in KNOWN_MODELS

    def test_available_input_tokens(self):
        info = KNOWN_MODELS["Qwen/Qwen2.5-7B-Instruct"]
        assert available_input_tokens(info) == 32768 - 4096 - 1000
        assert available_input_tokens(info, max_output_tokens=2000) == 32768 - 2000 - 1000

    def test_available_never_negative(self):
        assert available_input_tokens(ModelInfo("tiny", 1500, 1000)) == 0
