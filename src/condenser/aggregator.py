"""Rolling merge of compressed sections under a global token ceiling."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from condenser.compressor import DEFAULT_TIMEOUT, compress_buffer, compress_section
from condenser.importance import importance
from condenser.models import Section, SectionType
from condenser.providers import LLMProvider
from condenser.tokens import count_tokens

logger = logging.getLogger(__name__)

PROMPT_RESERVE_TOKENS = 1000
# Share of the global budget the buffer is squeezed to when it fills up
BUFFER_TARGET_RATIO = 0.3


def prompt_reserve(global_budget: int) -> int:
    """Tokens held back for the surrounding prompt.

    Capped at a quarter of the budget so small budgets aren't swallowed whole.
    """
    return min(PROMPT_RESERVE_TOKENS, max(0, global_budget) // 4)


def format_section(title: str, text: str) -> str:
    return f"\n\n## {title}\n\n{text}"


async def rolling_compress(
    sections: Sequence[Section],
    global_budget: int,
    provider: LLMProvider,
    model: str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> str:
    """Merge ``sections`` in document order into one buffer of about ``global_budget`` tokens.

    References are dropped. Before each section, if the buffer has no room
    left it is re-compressed to 30% of the budget in one LLM call; if that
    call fails the buffer is kept as is. The section is then compressed
    into whatever room remains and appended under a ``## title`` heading.

    The budget is soft: nothing is shrunk after the last section is
    appended, so the result can overshoot.

    Args:
        sections: Classified sections, in document order.
        global_budget: Token ceiling for the merged output.
        provider: LLM used for all compression calls.
        model: Model hint for token counting.
        timeout: Seconds allowed per LLM call.
    """
    accumulated = ""
    accumulated_tokens = 0
    reserve = prompt_reserve(global_budget)
    total = len(sections)

    logger.info("Rolling compression of %d sections into %d tokens", total, global_budget)

    for i, section in enumerate(sections):
        is_last = i == total - 1
        logger.info(
            "Section %d/%d: %s (%d tokens, importance %.0f%%)",
            i + 1,
            total,
            section.title,
            section.token_count,
            importance(section.type) * 100,
        )

        if section.type == SectionType.REFERENCE:
            logger.info("Skipping references")
            continue

        available = global_budget - accumulated_tokens - reserve

        if available <= 0 and accumulated:
            target = math.floor(global_budget * BUFFER_TARGET_RATIO)
            logger.info("Buffer full (%d tokens), re-compressing to ~%d", accumulated_tokens, target)
            try:
                accumulated = await compress_buffer(accumulated, target, provider, timeout=timeout)
            except Exception as exc:
                logger.warning(
                    "Buffer re-compression failed (%s: %s), keeping %d tokens",
                    type(exc).__name__,
                    exc,
                    accumulated_tokens,
                )
            else:
                accumulated_tokens = count_tokens(accumulated, model)
                logger.info("Buffer re-compressed to %d tokens", accumulated_tokens)
            available = global_budget - accumulated_tokens - reserve

        text = await compress_section(section, available, provider, timeout=timeout)
        accumulated += format_section(section.title, text)
        accumulated_tokens = count_tokens(accumulated, model)

        if is_last:
            # Soft budget: the final append may overshoot
            if accumulated_tokens > global_budget:
                logger.info(
                    "Final section kept in full, output is %d tokens over budget",
                    accumulated_tokens - global_budget,
                )
            break

    logger.info("Rolling compression done: %d tokens", accumulated_tokens)
    return accumulated
