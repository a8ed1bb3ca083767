"""Analyse many papers concurrently, one independent pipeline run each."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from condenser.pipeline import CompressionPipeline
from condenser.prompts import ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT = 3


@dataclass
class AnalysisResult:
    doc_id: str
    success: bool
    content: str | None = None
    error: str | None = None


async def analyze_document(
    doc_id: str,
    text: str,
    pipeline: CompressionPipeline,
    temperature: float | None = None,
) -> AnalysisResult:
    """Write a structured analysis of one paper. Failures are returned, not raised."""
    try:
        response = await pipeline.chat(
            text,
            ANALYSIS_SYSTEM_PROMPT,
            temperature=temperature,
            build_user_prompt=lambda body: build_analysis_prompt(doc_id, body),
        )
    except Exception as exc:
        logger.error("Analysis of %s failed: %s", doc_id, exc)
        return AnalysisResult(doc_id=doc_id, success=False, error=str(exc) or type(exc).__name__)

    logger.info("Analysis of %s done", doc_id)
    return AnalysisResult(doc_id=doc_id, success=True, content=response.content)


async def analyze_documents(
    documents: Iterable[tuple[str, str]],
    pipeline: CompressionPipeline,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT,
    temperature: float | None = None,
    on_done: Callable[[AnalysisResult], None] | None = None,
) -> list[AnalysisResult]:
    """Analyse ``(doc_id, text)`` pairs with at most ``max_concurrent`` in flight.

    Results come back in input order.

    Args:
        documents: Paper ids and their extracted text.
        pipeline: Shared pipeline; it keeps no per-document state.
        max_concurrent: Upper bound on simultaneous analyses.
        temperature: Sampling temperature for the analysis call; defaults to
            the pipeline's settings.
        on_done: Callback(result) called as each document finishes.
    """
    if max_concurrent < 1:
        raise ValueError("max_concurrent must be at least 1")

    semaphore = asyncio.Semaphore(max_concurrent)

    async def limited(doc_id: str, text: str) -> AnalysisResult:
        async with semaphore:
            result = await analyze_document(doc_id, text, pipeline, temperature=temperature)
        if on_done:
            on_done(result)
        return result

    docs = list(documents)
    logger.info("Analysing %d documents, %d at a time", len(docs), max_concurrent)
    results = await asyncio.gather(*(limited(doc_id, text) for doc_id, text in docs))

    failed = [r for r in results if not r.success]
    logger.info("Analysis finished: %d succeeded, %d failed", len(results) - len(failed), len(failed))
    for r in failed:
        logger.warning("  %s: %s", r.doc_id, r.error)

    return list(results)
