"""Context window and output limits for known models."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Tokens kept free for prompt scaffolding when sizing the input budget
SAFETY_MARGIN_TOKENS = 1000


@dataclass(frozen=True)
class ModelInfo:
    name: str
    max_context_tokens: int
    max_output_tokens: int
    cost_per_1k_input: float | None = None
    cost_per_1k_output: float | None = None


KNOWN_MODELS: dict[str, ModelInfo] = {
    # SiliconFlow
    "Qwen/Qwen2.5-7B-Instruct": ModelInfo("Qwen/Qwen2.5-7B-Instruct", 32768, 4096, 0.0007, 0.0007),
    "Qwen/Qwen2.5-72B-Instruct": ModelInfo("Qwen/Qwen2.5-72B-Instruct", 131072, 8192, 0.0035, 0.0035),
    # OpenAI
    "gpt-4o": ModelInfo("gpt-4o", 128000, 16384, 0.0025, 0.01),
    "gpt-4o-mini": ModelInfo("gpt-4o-mini", 128000, 16384, 0.00015, 0.0006),
    "gpt-4-turbo": ModelInfo("gpt-4-turbo", 128000, 4096, 0.01, 0.03),
    "gpt-3.5-turbo": ModelInfo("gpt-3.5-turbo", 16385, 4096, 0.0005, 0.0015),
    # Anthropic
    "claude-3-5-sonnet-20241022": ModelInfo("claude-3-5-sonnet-20241022", 200000, 8192, 0.003, 0.015),
    "claude-3-opus-20240229": ModelInfo("claude-3-opus-20240229", 200000, 4096, 0.015, 0.075),
    "claude-3-sonnet-20240229": ModelInfo("claude-3-sonnet-20240229", 200000, 4096, 0.003, 0.015),
    "claude-3-haiku-20240307": ModelInfo("claude-3-haiku-20240307", 200000, 4096, 0.00025, 0.00125),
    # DeepSeek
    "deepseek-chat": ModelInfo("deepseek-chat", 131072, 8192, 0.00014, 0.00028),
    "deepseek-reasoner": ModelInfo("deepseek-reasoner", 131072, 8192, 0.00055, 0.0022),
}

DEFAULT_CONTEXT_TOKENS = 32768
DEFAULT_OUTPUT_TOKENS = 4096


def get_model_info(model: str) -> ModelInfo:
    """Return the limits for ``model``, or conservative defaults if unknown."""
    info = KNOWN_MODELS.get(model)
    if info is not None:
        return info
    logger.warning(
        "Unknown model %s, assuming %d context / %d output tokens",
        model,
        DEFAULT_CONTEXT_TOKENS,
        DEFAULT_OUTPUT_TOKENS,
    )
    return ModelInfo(model, DEFAULT_CONTEXT_TOKENS, DEFAULT_OUTPUT_TOKENS)


def available_input_tokens(
    info: ModelInfo,
    max_output_tokens: int | None = None,
    reserve: int = SAFETY_MARGIN_TOKENS,
) -> int:
    """Tokens left for the prompt once the answer and a safety margin are set aside."""
    output = max_output_tokens or info.max_output_tokens
    return max(0, info.max_context_tokens - output - reserve)
