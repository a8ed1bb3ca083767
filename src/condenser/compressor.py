"""Compress single sections (and the rolling buffer) with an LLM.

Section compression never fails: when the LLM call errors, times out or
returns nothing, the section is truncated proportionally instead.
"""

from __future__ import annotations

import asyncio
import logging
import math

from condenser.importance import importance
from condenser.models import Section, SectionType
from condenser.prompts import (
    build_buffer_system_prompt,
    build_section_system_prompt,
    build_section_user_prompt,
)
from condenser.providers import ChatRequest, LLMProvider, Message

logger = logging.getLogger(__name__)

REFERENCE_PLACEHOLDER = "[References omitted]"
TRUNCATION_MARKER = "\n[... content truncated ...]"

# Every compressed section keeps at least this share of its target
MIN_RETENTION = 0.3
COMPRESSION_TEMPERATURE = 0.3
DEFAULT_TIMEOUT = 180.0
# Smallest length requested from the LLM when a section has no room left
MIN_SECTION_TOKENS = 50


class EmptyResponseError(Exception):
    """The LLM answered with no text."""


async def _complete(
    provider: LLMProvider, system: str, user: str, timeout: float | None
) -> str:
    request = ChatRequest(
        messages=[Message(role="system", content=system), Message(role="user", content=user)],
        temperature=COMPRESSION_TEMPERATURE,
    )
    response = await asyncio.wait_for(provider.chat(request), timeout)
    if not response.content or not response.content.strip():
        raise EmptyResponseError("LLM returned an empty response")
    return response.content


def desired_length(section: Section, target_tokens: int) -> int:
    """Token length to ask for when ``section`` must shrink to ``target_tokens``."""
    ratio = max(MIN_RETENTION, importance(section.type))
    # round() first so float error (2700 * 0.7 = 1889.999...) doesn't lose a token
    return max(0, math.floor(round(target_tokens * ratio, 6)))


def truncate_section(section: Section, desired_tokens: int) -> str:
    """Cut ``section.content`` to roughly ``desired_tokens`` and mark the cut."""
    if section.token_count <= 0:
        return section.content + TRUNCATION_MARKER
    kept_tokens = min(section.token_count, max(0, desired_tokens))
    keep = len(section.content) * kept_tokens // section.token_count
    return section.content[:keep] + TRUNCATION_MARKER


async def compress_section(
    section: Section,
    target_tokens: int,
    provider: LLMProvider,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> str:
    """Compress one section toward ``target_tokens``.

    Args:
        section: The section to compress. It is not modified.
        target_tokens: Token ceiling for this section.
        provider: LLM used as the compression operator.
        timeout: Seconds to wait for the LLM before truncating instead.

    Returns:
        A placeholder for references, the untouched content if it already
        fits, otherwise the LLM's compression or a truncated fallback.
    """
    if section.type == SectionType.REFERENCE:
        return REFERENCE_PLACEHOLDER

    if section.token_count <= max(0, target_tokens):
        return section.content

    desired = desired_length(section, target_tokens)
    if desired <= 0:
        desired = min(MIN_SECTION_TOKENS, section.token_count)
        logger.warning(
            "No room left for section '%s' (target %d tokens), asking for %d tokens",
            section.title,
            target_tokens,
            desired,
        )

    system_prompt = build_section_system_prompt(section.type, desired, importance(section.type))
    user_prompt = build_section_user_prompt(section.title, section.content)

    try:
        return await _complete(provider, system_prompt, user_prompt, timeout)
    except Exception as exc:
        logger.warning(
            "Compression of section '%s' failed (%s: %s), truncating to ~%d tokens",
            section.title,
            type(exc).__name__,
            exc,
            desired,
        )
        return truncate_section(section, desired)


async def compress_buffer(
    text: str,
    target_tokens: int,
    provider: LLMProvider,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> str:
    """Ask the LLM to shrink already-merged text to about ``target_tokens``.

    Unlike ``compress_section`` this has no fallback; errors propagate.
    """
    return await _complete(provider, build_buffer_system_prompt(target_tokens), text, timeout)
