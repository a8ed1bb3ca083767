"""Token counting with tiktoken, falling back to a character estimate.

The estimate (``ceil(len / 4)``) is a rough average for mixed English and
CJK text. Counting never raises: any tokenizer failure, including an
unknown model name, falls back to the estimate.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


@lru_cache(maxsize=32)
def _get_encoding(model: str) -> tiktoken.Encoding:
    """Resolve (and cache) the tiktoken encoding for a model name."""
    return tiktoken.encoding_for_model(model)


def estimate_tokens(text: str) -> int:
    """Deterministic character-based estimate."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def count_tokens(text: str, model: str | None = None) -> int:
    """Count tokens in ``text`` for ``model``.

    Args:
        text: Text to measure.
        model: Model hint. ``None`` skips the tokenizer and uses the estimate.

    Returns:
        Exact count when tiktoken knows the model, otherwise the estimate.
    """
    if not text:
        return 0
    if model is None:
        return estimate_tokens(text)
    try:
        encoding = _get_encoding(model)
        return len(encoding.encode(text, disallowed_special=()))
    except Exception as exc:
        logger.debug("No tokenizer for %s (%s), estimating", model, exc)
        return estimate_tokens(text)


class TokenCounter:
    """Token counter bound to a single model hint."""

    def __init__(self, model: str | None = None) -> None:
        self.model = model

    def count(self, text: str) -> int:
        return count_tokens(text, self.model)

    def __call__(self, text: str) -> int:
        return self.count(text)
