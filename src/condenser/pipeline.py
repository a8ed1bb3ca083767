"""Entry point: decide whether a prompt needs compressing, then answer it."""

from __future__ import annotations

import logging
from collections.abc import Callable

from condenser.aggregator import rolling_compress
from condenser.config import Settings
from condenser.model_info import ModelInfo, available_input_tokens, get_model_info
from condenser.providers import ChatRequest, ChatResponse, LLMProvider, Message
from condenser.sections import classify_sections
from condenser.tokens import count_tokens

logger = logging.getLogger(__name__)


class CompressionPipeline:
    """Fit prompts for one provider/model into its context window.

    Holds no per-document state, so one instance can serve many concurrent
    documents.
    """

    def __init__(
        self,
        provider: LLMProvider,
        settings: Settings | None = None,
        model_info: ModelInfo | None = None,
    ) -> None:
        self.provider = provider
        self.settings = settings or Settings()
        self.model_info = model_info or get_model_info(provider.model)

    @property
    def model(self) -> str:
        return self.provider.model

    @property
    def max_output_tokens(self) -> int:
        return self.settings.max_output_tokens or self.model_info.max_output_tokens

    @property
    def available_tokens(self) -> int:
        """Input budget: context window minus answer size minus safety margin."""
        return available_input_tokens(self.model_info, self.settings.max_output_tokens)

    def count(self, text: str) -> int:
        return count_tokens(text, self.model)

    async def compress(self, text: str, budget: int) -> str:
        """Classify ``text`` and roll it up into roughly ``budget`` tokens."""
        sections = classify_sections(text, self.model)
        logger.info("Found %d sections", len(sections))
        return await rolling_compress(
            sections,
            budget,
            self.provider,
            model=self.model,
            timeout=self.settings.timeout,
        )

    async def maybe_compress(
        self,
        raw_prompt: str,
        system_prompt: str = "",
        enabled: bool | None = None,
    ) -> str:
        """Return ``raw_prompt`` unchanged if it fits, otherwise a compressed version.

        Args:
            raw_prompt: The (possibly huge) prompt body.
            system_prompt: The system prompt that will accompany it.
            enabled: Override ``settings.compression_enabled``.
        """
        if enabled is None:
            enabled = self.settings.compression_enabled

        system_tokens = self.count(system_prompt)
        prompt_tokens = self.count(raw_prompt)
        available = self.available_tokens

        logger.info(
            "Prompt is %d tokens (+%d system), %d available for %s",
            prompt_tokens,
            system_tokens,
            available,
            self.model,
        )

        if system_tokens + prompt_tokens <= available:
            return raw_prompt
        if not enabled:
            logger.info("Compression disabled, sending prompt as is")
            return raw_prompt

        compressed = await self.compress(raw_prompt, max(0, available - system_tokens))

        compressed_tokens = self.count(compressed)
        reduction = 1 - compressed_tokens / prompt_tokens if prompt_tokens else 0.0
        logger.info(
            "Compressed %d -> %d tokens (%.1f%% smaller)",
            prompt_tokens,
            compressed_tokens,
            reduction * 100,
        )
        return compressed

    async def chat(
        self,
        raw_prompt: str,
        system_prompt: str = "",
        temperature: float | None = None,
        build_user_prompt: Callable[[str], str] | None = None,
    ) -> ChatResponse:
        """Compress ``raw_prompt`` if needed and send it to the LLM.

        Args:
            raw_prompt: The prompt body.
            system_prompt: System instructions (never compressed).
            temperature: Sampling temperature; defaults to the settings value.
            build_user_prompt: Wraps the effective prompt into the final user
                message, e.g. to add instructions around a paper's text.

        Errors from this final call propagate to the caller.
        """
        effective = await self.maybe_compress(raw_prompt, system_prompt)
        user_prompt = build_user_prompt(effective) if build_user_prompt else effective

        messages = []
        if system_prompt:
            messages.append(Message(role="system", content=system_prompt))
        messages.append(Message(role="user", content=user_prompt))

        request = ChatRequest(
            messages=messages,
            temperature=self.settings.temperature if temperature is None else temperature,
            max_tokens=self.max_output_tokens,
        )
        return await self.provider.chat(request)


async def maybe_compress(
    raw_prompt: str,
    system_prompt: str,
    provider: LLMProvider,
    enabled: bool = True,
    settings: Settings | None = None,
) -> str:
    """One-shot form of ``CompressionPipeline.maybe_compress``."""
    pipeline = CompressionPipeline(provider, settings=settings)
    return await pipeline.maybe_compress(raw_prompt, system_prompt, enabled=enabled)
